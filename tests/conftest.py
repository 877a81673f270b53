import pytest
from unittest.mock import MagicMock
from botocore.exceptions import ClientError

from s3io.config import Config

REGION = "eu-west-1"
BUCKET = "golang-to-s3"


def client_error(code: str, operation: str = "GetObject", message: str = "boom") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


@pytest.fixture
def config():
    return Config(region=REGION, bucket=BUCKET)


@pytest.fixture
def s3_client():
    return MagicMock()


@pytest.fixture
def aws_env(monkeypatch):
    monkeypatch.setenv("AWS_REGION", REGION)
    monkeypatch.setenv("AWS_BUCKET", BUCKET)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path
