import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from s3io.errors import ConfigError

REGION_VAR = "AWS_REGION"
BUCKET_VAR = "AWS_BUCKET"
LOG_LEVEL_VAR = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Config:
    region: str
    bucket: str

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """
        Read region and bucket once. Region is checked first, so a run missing
        both reports AWS_REGION.
        """
        env = os.environ if environ is None else environ
        region = env.get(REGION_VAR, "")
        if not region:
            raise ConfigError(REGION_VAR)
        bucket = env.get(BUCKET_VAR, "")
        if not bucket:
            raise ConfigError(BUCKET_VAR)
        return cls(region=region, bucket=bucket)


def log_level(environ: Optional[Mapping[str, str]] = None) -> str:
    """Level name from LOG_LEVEL, falling back to the default when unknown."""
    env = os.environ if environ is None else environ
    level = env.get(LOG_LEVEL_VAR, DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(level), int):
        return DEFAULT_LOG_LEVEL
    return level
