"""Sample configuration module"""
from .settings import config, AppConfig, ContentConfig, MerchantInfo

__all__ = ["config", "AppConfig", "ContentConfig", "MerchantInfo"]
