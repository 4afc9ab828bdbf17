"""
Credential discovery for the Content API samples.

Lookup order:
  1. Google Application Default Credentials
  2. Service account key in <config dir>/service-account.json
  3. OAuth2 client in <config dir>/client-secrets.json plus a stored refresh
     token, either from merchant-info.json ("token": {"refresh_token": ...})
     or from a Secret Manager version named by CONTENT_REFRESH_TOKEN_SECRET
"""
import json
import logging
from typing import Optional

import google.auth
from google.auth.exceptions import DefaultCredentialsError
from google.api_core.exceptions import GoogleAPICallError, NotFound
from google.cloud import secretmanager
from google.oauth2 import service_account
from google.oauth2.credentials import Credentials

from merchant.config.settings import ContentConfig, MerchantInfo
from merchant.errors import CredentialsError

logger = logging.getLogger(__name__)

CONTENT_SCOPE = "https://www.googleapis.com/auth/content"
DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"


def read_secret_refresh_token(secret_version_name: str) -> str:
    """Fetch a refresh token stored in Google Secret Manager"""
    client = secretmanager.SecretManagerServiceClient()
    try:
        resp = client.access_secret_version(request={"name": secret_version_name})
    except NotFound as e:
        raise CredentialsError(f"Secret version not found: {secret_version_name}") from e
    except GoogleAPICallError as e:
        raise CredentialsError(f"Failed to read refresh token from {secret_version_name}: {e}") from e
    return resp.payload.data.decode("utf-8")


def _load_client_secrets(path) -> dict:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CredentialsError(f"Could not read OAuth2 client file {path}: {e}") from e
    # Downloaded client files nest everything under "installed" or "web"
    client = data.get("installed") or data.get("web") or data
    if not client.get("client_id") or not client.get("client_secret"):
        raise CredentialsError(f"OAuth2 client file {path} has no client_id/client_secret")
    return client


def _refresh_token(content_config: ContentConfig, merchant_info: Optional[MerchantInfo]) -> Optional[str]:
    if merchant_info and merchant_info.token.get("refresh_token"):
        return merchant_info.token["refresh_token"]
    if content_config.refresh_token_secret:
        logger.info(f"Reading refresh token from Secret Manager: {content_config.refresh_token_secret}")
        return read_secret_refresh_token(content_config.refresh_token_secret)
    return None


def load_credentials(content_config: ContentConfig, merchant_info: Optional[MerchantInfo] = None):
    """
    Find credentials for the Content API

    Args:
        content_config: Content API configuration (locates the config dir)
        merchant_info: Loaded merchant-info.json, used for a stored refresh token

    Returns:
        A google.auth credentials object scoped for the Content API

    Raises:
        CredentialsError: if none of the sources yields credentials
    """
    try:
        credentials, _ = google.auth.default(scopes=[CONTENT_SCOPE])
        logger.info("Using Google Application Default Credentials.")
        return credentials
    except DefaultCredentialsError:
        logger.debug("No Application Default Credentials, checking the config directory")

    account_file = content_config.service_account_file
    if account_file.is_file():
        logger.info(f"Loading service account credentials from {account_file}.")
        try:
            return service_account.Credentials.from_service_account_file(
                str(account_file), scopes=[CONTENT_SCOPE]
            )
        except (OSError, ValueError) as e:
            raise CredentialsError(f"Invalid service account file {account_file}: {e}") from e

    oauth_file = content_config.oauth_client_file
    if oauth_file.is_file():
        logger.info(f"Loading OAuth2 credentials from {oauth_file}.")
        client = _load_client_secrets(oauth_file)
        refresh_token = _refresh_token(content_config, merchant_info)
        if not refresh_token:
            raise CredentialsError(
                f"No refresh token stored for the OAuth2 client in {oauth_file}. "
                f"Add one under \"token\" in {content_config.config_file} "
                "or set CONTENT_REFRESH_TOKEN_SECRET."
            )
        return Credentials(
            token=None,
            refresh_token=refresh_token,
            client_id=client["client_id"],
            client_secret=client["client_secret"],
            token_uri=client.get("token_uri", DEFAULT_TOKEN_URI),
            scopes=[CONTENT_SCOPE],
        )

    raise CredentialsError(
        "Could not find or read credentials from either the Google Application "
        f"Default credentials, {account_file}, or {oauth_file}."
    )
