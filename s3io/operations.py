import os
import logging
from typing import Any, Dict, List

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import BotoCoreError, ClientError

from s3io.config import Config
from s3io.errors import LocalFileError, RemoteError, classify, error_code

log = logging.getLogger(__name__)

# -------- Transfer settings --------
CHUNK_SIZE = 1024 * 1024
# us-east-1 rejects an explicit LocationConstraint
DEFAULT_REGION = "us-east-1"


def s3_uri(bucket: str, key: str) -> str:
    return f"s3://{bucket}/{key}"


def _describe(exc: OSError) -> str:
    return exc.strerror or str(exc)


def make_client(config: Config):
    try:
        session = boto3.session.Session(region_name=config.region)
        return session.client("s3")
    except BotoCoreError as e:
        raise RemoteError(f"session: {e}") from e


def ensure_bucket(client, config: Config) -> bool:
    """
    Create the configured bucket unless we already own it.
    Returns True if a bucket was created.
    """
    params: Dict[str, Any] = {"Bucket": config.bucket}
    if config.region != DEFAULT_REGION:
        params["CreateBucketConfiguration"] = {"LocationConstraint": config.region}
    try:
        client.create_bucket(**params)
    except ClientError as e:
        code = error_code(e)
        if code == "BucketAlreadyOwnedByYou":
            log.debug(f"bucket {config.bucket} already exists")
            return False
        if code == "BucketAlreadyExists":
            raise RemoteError(f"{code}: {e}") from e
        raise RemoteError(str(e)) from e
    except BotoCoreError as e:
        raise RemoteError(str(e)) from e
    log.info(f"created bucket {config.bucket} in {config.region}")
    return True


# -------- Operations --------
def upload(client, config: Config, path: str) -> str:
    """Store the local file under its basename. Returns the key written."""
    try:
        f = open(path, "rb")
    except OSError as e:
        raise LocalFileError(f"open {path}: {_describe(e)}") from e
    key = os.path.basename(path)
    with f:
        try:
            client.upload_fileobj(f, config.bucket, key)
        except (S3UploadFailedError, ClientError, BotoCoreError) as e:
            raise RemoteError(f"upload_fileobj: {e}") from e
    log.info(f"uploaded {path} -> {s3_uri(config.bucket, key)}")
    return key


def download(client, config: Config, key: str) -> None:
    """
    Write the object named exactly `key` to the local path `key`.
    The local file is created before the fetch and left behind on failure.
    """
    try:
        f = open(key, "wb")
    except OSError as e:
        raise LocalFileError(f"create {key}: {_describe(e)}") from e
    with f:
        try:
            obj = client.get_object(Bucket=config.bucket, Key=key)
            for chunk in obj["Body"].iter_chunks(chunk_size=CHUNK_SIZE):
                f.write(chunk)
        except (ClientError, BotoCoreError) as e:
            raise classify(e, config.bucket, key) from e
        except OSError as e:
            raise LocalFileError(f"write {key}: {_describe(e)}") from e
    log.info(f"downloaded {s3_uri(config.bucket, key)} -> {key}")


def delete(client, config: Config, key: str) -> None:
    try:
        client.delete_object(Bucket=config.bucket, Key=key)
    except (ClientError, BotoCoreError) as e:
        raise classify(e, config.bucket, key) from e
    log.info(f"deleted {s3_uri(config.bucket, key)}")


def list_keys(client, config: Config) -> List[str]:
    keys: List[str] = []
    try:
        paginator = client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=config.bucket):
            for obj in page.get("Contents", []):
                keys.append(obj["Key"])
    except (ClientError, BotoCoreError) as e:
        raise RemoteError(f"list_objects_v2: {e}") from e
    log.debug(f"listed {len(keys)} keys in {config.bucket}")
    return keys
