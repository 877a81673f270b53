import sys

from s3io.cli import main

sys.exit(main())
