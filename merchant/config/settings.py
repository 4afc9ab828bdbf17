"""
Centralized configuration management for the Merchant Center account samples
"""
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

from merchant.errors import ConfigError

# Load environment variables
project_root = Path(__file__).parent.parent.parent
env_path = project_root / ".env"
load_dotenv(env_path)

CONFIG_FILE_NAME = "merchant-info.json"
SERVICE_ACCOUNT_FILE_NAME = "service-account.json"
OAUTH_CLIENT_FILE_NAME = "client-secrets.json"
ENDPOINT_ENV_VAR = "GOOGLE_SHOPPING_SAMPLES_ENDPOINT"


@dataclass
class MerchantInfo:
    """Contents of merchant-info.json"""
    merchant_id: int
    application_name: str = "Content API for Shopping Samples"
    website_url: Optional[str] = None
    account_sample_user: Optional[str] = None
    account_sample_adwords_id: Optional[int] = None
    token: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "MerchantInfo":
        if not data.get("merchantId"):
            raise ConfigError("merchantId must be set in the sample configuration")
        try:
            merchant_id = int(data["merchantId"])
            adwords_id = data.get("accountSampleAdWordsCID")
            adwords_id = int(adwords_id) if adwords_id else None
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Account ids in the sample configuration must be numeric: {e}") from e
        return cls(
            merchant_id=merchant_id,
            application_name=data.get("applicationName") or cls.application_name,
            website_url=data.get("websiteUrl") or None,
            account_sample_user=data.get("accountSampleUser") or None,
            account_sample_adwords_id=adwords_id,
            token=data.get("token") or {},
        )


class ContentConfig:
    """Content API for Shopping configuration"""

    def __init__(self, config_path: Optional[str] = None):
        default_path = Path.home() / "shopping-samples"
        self.config_path = Path(config_path or os.getenv("SHOPPING_SAMPLES_CONFIG_PATH") or default_path)
        self.api_version = os.getenv("CONTENT_API_VERSION", "v2.1")
        self.endpoint = os.getenv(ENDPOINT_ENV_VAR) or None
        self.refresh_token_secret = os.getenv("CONTENT_REFRESH_TOKEN_SECRET") or None

    @property
    def config_dir(self) -> Path:
        """Directory holding the Content API sample files"""
        return self.config_path / "content"

    @property
    def config_file(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    @property
    def service_account_file(self) -> Path:
        return self.config_dir / SERVICE_ACCOUNT_FILE_NAME

    @property
    def oauth_client_file(self) -> Path:
        return self.config_dir / OAUTH_CLIENT_FILE_NAME

    def api_endpoint(self) -> Optional[str]:
        """
        Validated non-standard API endpoint, or None for the default one.

        Raises:
            ConfigError: if the endpoint is not an absolute URL
        """
        if not self.endpoint:
            return None
        parts = urlparse(self.endpoint)
        if not parts.scheme or not parts.netloc:
            raise ConfigError(f"Expected absolute endpoint URL: {self.endpoint}")
        return self.endpoint.rstrip("/") + "/"

    def load_merchant_info(self) -> MerchantInfo:
        """
        Read merchant-info.json from the config directory

        Raises:
            ConfigError: if the file is missing, unreadable, or not valid JSON
        """
        path = self.config_file
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(
                f"Could not find or read the config file at {path}. "
                f"You can use the {CONFIG_FILE_NAME} file in the samples root as a template."
            ) from e
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"The config file at {path} is not valid JSON format. "
                f"You can use the {CONFIG_FILE_NAME} file in the samples root as a template."
            ) from e
        if not isinstance(data, dict):
            raise ConfigError(f"The config file at {path} must contain a JSON object")
        return MerchantInfo.from_dict(data)


class AppConfig:
    """Main application configuration"""

    def __init__(self, config_path: Optional[str] = None):
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

        # Sub-configs
        self.content = ContentConfig(config_path)

    def validate(self) -> tuple[bool, list[str]]:
        """Validate all configurations"""
        errors = []

        if not self.content.config_file.is_file():
            errors.append(f"Sample configuration not found at {self.content.config_file}")
        try:
            self.content.api_endpoint()
        except ConfigError as e:
            errors.append(str(e))

        return len(errors) == 0, errors


# Global config instance
config = AppConfig()
