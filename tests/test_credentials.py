import json
from unittest.mock import MagicMock, patch

import pytest
from google.api_core.exceptions import NotFound
from google.auth.exceptions import DefaultCredentialsError

from merchant.config.settings import ContentConfig, MerchantInfo
from merchant.errors import CredentialsError
from merchant.services.credentials import CONTENT_SCOPE, load_credentials, read_secret_refresh_token


@pytest.fixture
def no_adc():
    with patch("merchant.services.credentials.google.auth.default") as mock_default:
        mock_default.side_effect = DefaultCredentialsError("no adc")
        yield mock_default


@pytest.fixture
def content_config(tmp_path, monkeypatch):
    monkeypatch.delenv("CONTENT_REFRESH_TOKEN_SECRET", raising=False)
    (tmp_path / "content").mkdir()
    return ContentConfig(str(tmp_path))


def test_application_default_credentials_first(content_config):
    adc = object()
    with patch("merchant.services.credentials.google.auth.default", return_value=(adc, "proj")) as mock_default:
        assert load_credentials(content_config) is adc
    mock_default.assert_called_once_with(scopes=[CONTENT_SCOPE])


@patch("merchant.services.credentials.service_account.Credentials.from_service_account_file")
def test_service_account_file(mock_from_file, no_adc, content_config):
    content_config.service_account_file.write_text("{}")
    assert load_credentials(content_config) is mock_from_file.return_value
    mock_from_file.assert_called_once_with(str(content_config.service_account_file), scopes=[CONTENT_SCOPE])


def test_oauth_client_with_stored_token(no_adc, content_config):
    content_config.oauth_client_file.write_text(
        json.dumps({"installed": {"client_id": "cid", "client_secret": "secret"}})
    )
    info = MerchantInfo(merchant_id=5, token={"refresh_token": "rt"})

    credentials = load_credentials(content_config, info)

    assert credentials.refresh_token == "rt"
    assert credentials.client_id == "cid"
    assert credentials.token_uri == "https://oauth2.googleapis.com/token"


@patch("merchant.services.credentials.read_secret_refresh_token", return_value="from-secret")
def test_oauth_client_with_secret_manager_token(mock_secret, no_adc, tmp_path, monkeypatch):
    monkeypatch.setenv("CONTENT_REFRESH_TOKEN_SECRET", "projects/p/secrets/s/versions/latest")
    (tmp_path / "content").mkdir()
    content_config = ContentConfig(str(tmp_path))
    content_config.oauth_client_file.write_text(json.dumps({"client_id": "cid", "client_secret": "secret"}))

    credentials = load_credentials(content_config, MerchantInfo(merchant_id=5))

    assert credentials.refresh_token == "from-secret"
    mock_secret.assert_called_once_with("projects/p/secrets/s/versions/latest")


def test_oauth_client_without_token(no_adc, content_config):
    content_config.oauth_client_file.write_text(json.dumps({"web": {"client_id": "cid", "client_secret": "s"}}))
    with pytest.raises(CredentialsError, match="No refresh token"):
        load_credentials(content_config, MerchantInfo(merchant_id=5))


def test_nothing_found(no_adc, content_config):
    with pytest.raises(CredentialsError, match="Could not find or read credentials"):
        load_credentials(content_config)


@patch("merchant.services.credentials.secretmanager.SecretManagerServiceClient")
def test_read_secret_refresh_token(mock_client_cls):
    response = MagicMock()
    response.payload.data = b"rt"
    mock_client_cls.return_value.access_secret_version.return_value = response
    assert read_secret_refresh_token("projects/p/secrets/s/versions/1") == "rt"


@patch("merchant.services.credentials.secretmanager.SecretManagerServiceClient")
def test_read_secret_not_found(mock_client_cls):
    mock_client_cls.return_value.access_secret_version.side_effect = NotFound("gone")
    with pytest.raises(CredentialsError, match="Secret version not found"):
        read_secret_refresh_token("projects/p/secrets/s/versions/1")
