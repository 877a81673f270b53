from botocore.exceptions import ClientError

BUCKET_MISSING_CODES = ("NoSuchBucket",)
KEY_MISSING_CODES = ("NoSuchKey", "404", "NotFound")


class S3IOError(Exception):
    """Base class for every failure the CLI reports."""


class UsageError(S3IOError):
    pass


class ConfigError(S3IOError):
    def __init__(self, var: str):
        super().__init__(f"{var} environment variable is not set")
        self.var = var


class LocalFileError(S3IOError):
    pass


class RemoteError(S3IOError):
    pass


class BucketNotFound(RemoteError):
    def __init__(self, bucket: str):
        super().__init__("bucket not found")
        self.bucket = bucket


class KeyNotFound(RemoteError):
    def __init__(self, bucket: str, key: str):
        super().__init__(f"{bucket}/{key}: no such file")
        self.bucket = bucket
        self.key = key


def error_code(exc: Exception) -> str:
    if not isinstance(exc, ClientError):
        return ""
    return exc.response.get("Error", {}).get("Code", "")


def classify(exc: Exception, bucket: str, key: str) -> RemoteError:
    """
    Map an error raised by the S3 client onto bucket-not-found,
    key-not-found, or a pass-through RemoteError with the original text.
    """
    code = error_code(exc)
    if code in BUCKET_MISSING_CODES:
        return BucketNotFound(bucket)
    if code in KEY_MISSING_CODES:
        return KeyNotFound(bucket, key)
    return RemoteError(str(exc))
