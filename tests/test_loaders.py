import io
from pathlib import Path
from unittest.mock import Mock

import pytest
import pytest_mock
from botocore.exceptions import ClientError, EndpointConnectionError

from strata.exceptions import ConfigurationError, SourceUnavailableError
from strata.loaders import FileLoader, S3Loader, loader_for_uri, loader_type


@pytest.fixture
def s3_client(mocker: pytest_mock.MockFixture) -> Mock:
    client = mocker.Mock()
    client.get_object.return_value = {"Body": io.BytesIO(b"a: 1\n")}
    return client


def test_file_loader(config_file: Path) -> None:
    assert FileLoader(config_file).load() == config_file.read_bytes()
    assert FileLoader(str(config_file)).load() == config_file.read_bytes()


def test_file_loader_missing(tmp_path: Path) -> None:
    with pytest.raises(SourceUnavailableError, match="does not exist"):
        FileLoader(tmp_path / "oh_no_nothing_here.yaml").load()


def test_file_loader_directory(tmp_path: Path) -> None:
    with pytest.raises(SourceUnavailableError):
        FileLoader(tmp_path).load()


def test_s3_loader_from_uri(s3_client: Mock) -> None:
    loader = S3Loader.from_uri("s3://us-west-2/my-bucket/path/to/config.yaml", client=s3_client)
    assert loader.region == "us-west-2"
    assert loader.bucket == "my-bucket"
    assert loader.key == "path/to/config.yaml"
    assert loader.uri == "s3://us-west-2/my-bucket/path/to/config.yaml"


@pytest.mark.parametrize(
    "uri", ["s3://us-west-2/my-bucket", "s3://us-west-2//key", "file.yaml", "s3://"]
)
def test_s3_loader_bad_uri(uri: str) -> None:
    with pytest.raises(ConfigurationError):
        S3Loader.from_uri(uri, client=object())


def test_s3_loader_load(s3_client: Mock) -> None:
    loader = S3Loader("us-west-2", "bucket", "config.yaml", client=s3_client)
    assert loader.load() == b"a: 1\n"
    s3_client.get_object.assert_called_once_with(Bucket="bucket", Key="config.yaml")


@pytest.mark.parametrize("code", ["NoSuchKey", "NoSuchBucket", "404"])
def test_s3_loader_not_found(s3_client: Mock, code: str) -> None:
    s3_client.get_object.side_effect = ClientError(
        {"Error": {"Code": code, "Message": "Not Found"}}, "GetObject"
    )
    loader = S3Loader("us-west-2", "bucket", "config.yaml", client=s3_client)
    with pytest.raises(SourceUnavailableError, match="not found"):
        loader.load()


def test_s3_loader_client_errors(s3_client: Mock) -> None:
    s3_client.get_object.side_effect = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}}, "GetObject"
    )
    loader = S3Loader("us-west-2", "bucket", "config.yaml", client=s3_client)
    with pytest.raises(SourceUnavailableError, match="Could not fetch"):
        loader.load()

    s3_client.get_object.side_effect = EndpointConnectionError(endpoint_url="https://s3")
    with pytest.raises(SourceUnavailableError, match="Could not fetch"):
        loader.load()


def test_s3_loader_creates_client(mocker: pytest_mock.MockFixture) -> None:
    client_mock = mocker.patch("strata.loaders.boto3.client")
    loader = S3Loader("eu-west-1", "bucket", "key")
    client_mock.assert_called_once_with("s3", region_name="eu-west-1")
    assert loader._client is client_mock.return_value


def test_loader_for_uri(mocker: pytest_mock.MockFixture) -> None:
    mocker.patch("strata.loaders.boto3.client")
    assert loader_type("s3://region/bucket/key") == "s3"
    assert loader_type("config/config.yaml") == "file"
    assert isinstance(loader_for_uri("s3://region/bucket/key"), S3Loader)
    file_loader = loader_for_uri("config/config.yaml")
    assert isinstance(file_loader, FileLoader)
    assert file_loader.path == Path("config/config.yaml")
