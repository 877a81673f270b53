"""Upload, download, delete and list objects in a single S3 bucket."""

__version__ = "0.1.0"
