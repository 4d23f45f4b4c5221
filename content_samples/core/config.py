"""
Centralized application configuration.

This module handles environment variables through Pydantic Settings, loads the
merchant information file that every sample shares and resolves the Content API
endpoints (production and sandbox) the clients talk to.
"""

import json
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from content_samples.utils.error_handler import ConfigurationException

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "merchant-info.json"
CONFIG_SUBDIR = "content"
SANDBOX_VERSION_SEGMENT = "v2sandbox"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every value has a default suitable for running the samples against the
    public Content API sandbox.
    """

    # === BASIC APP CONFIGURATION ===
    APP_NAME: str = "Content API Orders Samples"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # === LOGGING ===
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE_PATH: Optional[str] = Field(default=None)
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)

    # === SAMPLES CONFIGURATION ===
    CONTENT_SAMPLES_CONFIG_PATH: str = Field(default_factory=lambda: str(Path.home() / "shopping-samples"))
    GOOGLE_SHOPPING_SAMPLES_ENDPOINT: Optional[str] = Field(default=None)
    TEST_ORDER_TEMPLATE: str = Field(default="template1")

    # === CONTENT API ===
    CONTENT_API_ROOT_URL: str = Field(default="https://shoppingcontent.googleapis.com/")
    CONTENT_API_BASE_PATH: str = Field(default="content/v2/")
    CONTENT_API_ACCESS_TOKEN: Optional[str] = Field(default=None)
    HTTP_TIMEOUT_SECONDS: float = Field(default=30.0)
    HTTP_CONNECT_TIMEOUT_SECONDS: float = Field(default=10.0)
    ORDERS_PAGE_SIZE: Optional[int] = Field(default=None)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate that the log level is a known logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {valid_levels}")
        return v.upper()

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Validate that the environment is a known one."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT must be one of: {valid_envs}")
        return v.lower()

    @field_validator("GOOGLE_SHOPPING_SAMPLES_ENDPOINT", "CONTENT_API_ACCESS_TOKEN", mode="before")
    @classmethod
    def empty_as_none(cls, v):
        """Treat empty environment values as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("ORDERS_PAGE_SIZE")
    @classmethod
    def validate_page_size(cls, v):
        """Validate the page size for order listing."""
        if v is not None and v < 1:
            raise ValueError("ORDERS_PAGE_SIZE must be a positive integer")
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Get the singleton settings instance.

    Returns:
        Settings: Cached settings
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Reload settings (useful for testing).

    Returns:
        Settings: Fresh settings instance
    """
    get_settings.cache_clear()
    return get_settings()


# =============================================================================
# MERCHANT INFO
# =============================================================================


class MerchantInfo(BaseModel):
    """Contents of ``merchant-info.json``."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    merchant_id: int = Field(alias="merchantId")
    application_name: str = Field(default="Content API Samples", alias="applicationName")
    website_url: Optional[str] = Field(default=None, alias="websiteUrl")
    account_sample_user: Optional[str] = Field(default=None, alias="accountSampleUser")
    account_sample_adwords_cid: Optional[int] = Field(default=None, alias="accountSampleAdWordsCID")
    token: Optional[dict[str, Any]] = None

    @property
    def access_token(self) -> Optional[str]:
        """Cached OAuth access token, if one was stored with the merchant info."""
        if not self.token:
            return None
        return self.token.get("access_token")


def get_config_dir(config_path: Optional[str] = None) -> Path:
    """Directory holding the Content API sample configuration files."""
    base = config_path or get_settings().CONTENT_SAMPLES_CONFIG_PATH
    return Path(os.path.expanduser(base)) / CONFIG_SUBDIR


def load_merchant_info(config_dir: Path) -> MerchantInfo:
    """
    Load and validate ``merchant-info.json`` from the configuration directory.

    Raises:
        ConfigurationException: If the file is missing, unreadable or invalid
    """
    config_file = Path(config_dir) / CONFIG_FILE_NAME
    template_hint = f"You can use the {CONFIG_FILE_NAME} file in the samples root as a template."

    try:
        raw = config_file.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationException(
            f"Could not find or read the config file at {config_file}. {template_hint}",
            config_key=str(config_file),
        ) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationException(
            f"The config file at {config_file} is not valid JSON format. {template_hint}",
            config_key=str(config_file),
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationException(
            f"The config file at {config_file} must contain a JSON object. {template_hint}",
            config_key=str(config_file),
        )

    try:
        info = MerchantInfo.model_validate(data)
    except ValidationError as e:
        raise ConfigurationException(
            f"The config file at {config_file} is missing required fields: {e}",
            config_key=str(config_file),
        ) from e

    logger.debug(f"Loaded merchant info for merchant {info.merchant_id} from {config_file}")
    return info


def resolve_access_token(merchant_info: MerchantInfo, settings: Optional[Settings] = None) -> str:
    """
    Pick the access token used for the ``Authorization`` header.

    The ``CONTENT_API_ACCESS_TOKEN`` environment value wins over the token
    cached in the merchant info file.

    Raises:
        ConfigurationException: If no token is available
    """
    settings = settings or get_settings()
    if settings.CONTENT_API_ACCESS_TOKEN:
        return settings.CONTENT_API_ACCESS_TOKEN
    if merchant_info.access_token:
        return merchant_info.access_token
    raise ConfigurationException(
        "Could not find credentials: set CONTENT_API_ACCESS_TOKEN or store a token "
        f"with an access_token in {CONFIG_FILE_NAME}.",
        config_key="CONTENT_API_ACCESS_TOKEN",
    )


# =============================================================================
# ENDPOINTS
# =============================================================================


@dataclass(frozen=True)
class ServiceEndpoints:
    """Root URL and base paths for the production and sandbox services."""

    root_url: str
    base_path: str
    sandbox_base_path: str

    @property
    def base_url(self) -> str:
        return f"{self.root_url}{self.base_path}"

    @property
    def sandbox_base_url(self) -> str:
        return f"{self.root_url}{self.sandbox_base_path}"


def resolve_endpoints(
    endpoint: Optional[str] = None,
    default_root_url: str = "https://shoppingcontent.googleapis.com/",
    default_base_path: str = "content/v2/",
) -> ServiceEndpoints:
    """
    Resolve production and sandbox endpoints.

    A non-standard endpoint must be an absolute URL. The sandbox base path swaps
    a trailing ``v2`` segment for ``v2sandbox``; when the base path has no such
    segment the same path is used for sandbox calls.

    Raises:
        ConfigurationException: If the endpoint override is not absolute or cannot be parsed
    """
    if endpoint:
        try:
            parts = urlparse(endpoint)
            parts.port  # raises ValueError for a malformed port
        except ValueError as e:
            raise ConfigurationException(
                f"Invalid endpoint URL: {endpoint} ({e})",
                config_key="GOOGLE_SHOPPING_SAMPLES_ENDPOINT",
            ) from e
        if not parts.scheme or not parts.hostname:
            raise ConfigurationException(
                f"Expected absolute endpoint URL: {endpoint}",
                config_key="GOOGLE_SHOPPING_SAMPLES_ENDPOINT",
            )
        # netloc keeps IPv6 brackets; credentials are dropped
        host = parts.netloc.rpartition("@")[2]
        root_url = f"{parts.scheme}://{host}/"
        path = parts.path.strip("/")
        base_path = f"{path}/" if path else ""
        logger.info(f"Using non-standard API endpoint: {root_url}{base_path}")
    else:
        root_url = default_root_url if default_root_url.endswith("/") else f"{default_root_url}/"
        path = default_base_path.strip("/")
        base_path = f"{path}/" if path else ""

    segments = base_path.rstrip("/").split("/")
    if segments[-1] == "v2":
        sandbox_base_path = "/".join(segments[:-1] + [SANDBOX_VERSION_SEGMENT]) + "/"
    else:
        logger.info("Using same endpoint for sandbox methods.")
        sandbox_base_path = base_path

    return ServiceEndpoints(root_url=root_url, base_path=base_path, sandbox_base_path=sandbox_base_path)


def get_service_endpoints(settings: Optional[Settings] = None) -> ServiceEndpoints:
    """Resolve endpoints from the configured settings."""
    settings = settings or get_settings()
    return resolve_endpoints(
        settings.GOOGLE_SHOPPING_SAMPLES_ENDPOINT,
        default_root_url=settings.CONTENT_API_ROOT_URL,
        default_base_path=settings.CONTENT_API_BASE_PATH,
    )
