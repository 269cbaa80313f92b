"""
Configuration for the PDF Services client and samples.

Settings are read from environment variables and from a ``.env`` file at the
project root. ClientConfig is the explicit, immutable view of those settings
that gets handed to a PDFServices client.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for .env file loading (allows running from any CWD)
PROJECT_ROOT = Path(__file__).resolve().parent.parent

IMS_TOKEN_ENDPOINT = "https://ims-na1.adobelogin.com/ims/token/v3"
IMS_JWT_EXCHANGE_ENDPOINT = "https://ims-na1.adobelogin.com/ims/exchange/jwt"


class Region(str, Enum):
    """Service region; selects the API host documents are processed in."""

    US = "US"
    EU = "EU"

    @property
    def base_url(self) -> str:
        return REGION_BASE_URLS[self]


REGION_BASE_URLS = {
    Region.US: "https://pdf-services.adobe.io",
    Region.EU: "https://pdf-services-ew1.adobe.io",
}


class ProxyScheme(str, Enum):
    HTTP = "http"
    HTTPS = "https"


class ProxyServerConfig(BaseModel):
    """Proxy server used for all outbound calls.

    Attributes:
        host: Proxy hostname.
        scheme: http or https.
        port: Optional port; the scheme default is used when unset.
        username: Optional proxy user.
        password: Optional proxy password (requires username).
    """

    host: str
    scheme: ProxyScheme = ProxyScheme.HTTP
    port: int | None = Field(default=None, ge=1, le=65535)
    username: str | None = None
    password: str | None = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_credentials(self) -> "ProxyServerConfig":
        if self.password and not self.username:
            raise ValueError("proxy password requires a username")
        return self

    @property
    def url(self) -> str:
        auth = ""
        if self.username:
            auth = self.username
            if self.password:
                auth += f":{self.password}"
            auth += "@"
        port = f":{self.port}" if self.port else ""
        return f"{self.scheme.value}://{auth}{self.host}{port}"


class Settings(BaseSettings):
    """
    Settings for the PDF Services samples.

    Environment variables are loaded from the .env file and can be overridden
    by actual environment variables.
    """

    # Credentials
    PDF_SERVICES_CLIENT_ID: str = ""
    PDF_SERVICES_CLIENT_SECRET: str = ""
    PDF_SERVICES_CREDENTIALS_FILE: str | None = None

    # Service endpoints
    PDF_SERVICES_REGION: Region = Region.US
    PDF_SERVICES_BASE_URL: str | None = None  # Overrides the region host
    PDF_SERVICES_IMS_ENDPOINT: str = IMS_TOKEN_ENDPOINT

    # HTTP timeouts (seconds)
    PDF_SERVICES_CONNECT_TIMEOUT: float = 10.0
    PDF_SERVICES_READ_WRITE_TIMEOUT: float = 40.0

    # Job polling
    PDF_SERVICES_POLL_INTERVAL: float = 1.0  # Used when no retry-after is returned
    PDF_SERVICES_MAX_WAIT_SECONDS: float | None = 600.0

    # Proxy
    PDF_SERVICES_PROXY_HOST: str | None = None
    PDF_SERVICES_PROXY_SCHEME: ProxyScheme = ProxyScheme.HTTP
    PDF_SERVICES_PROXY_PORT: int | None = None
    PDF_SERVICES_PROXY_USERNAME: str | None = None
    PDF_SERVICES_PROXY_PASSWORD: str | None = None

    # Samples
    OUTPUT_DIR: str = "output"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=PROJECT_ROOT / ".env",
        extra="ignore"
    )


class ClientConfig(BaseModel):
    """Immutable client configuration.

    Attributes:
        region: Service region.
        base_url: Explicit API host; defaults to the region host.
        ims_endpoint: Token endpoint for service principal credentials.
        connect_timeout: Connection timeout in seconds.
        read_write_timeout: Socket read/write timeout in seconds.
        poll_interval: Delay between polls when the service suggests none.
        max_wait_seconds: Total budget for awaiting one job; None waits forever.
        proxy: Optional proxy server.
    """

    region: Region = Region.US
    base_url: str | None = None
    ims_endpoint: str = IMS_TOKEN_ENDPOINT
    connect_timeout: float = Field(default=10.0, gt=0)
    read_write_timeout: float = Field(default=40.0, gt=0)
    poll_interval: float = Field(default=1.0, ge=0)
    max_wait_seconds: float | None = Field(default=600.0, gt=0)
    proxy: ProxyServerConfig | None = None

    model_config = {"frozen": True}

    @property
    def api_base_url(self) -> str:
        return (self.base_url or self.region.base_url).rstrip("/")

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> "ClientConfig":
        """Build a ClientConfig from Settings (the module default if None)."""
        s = source or settings
        proxy = None
        if s.PDF_SERVICES_PROXY_HOST:
            proxy = ProxyServerConfig(
                host=s.PDF_SERVICES_PROXY_HOST,
                scheme=s.PDF_SERVICES_PROXY_SCHEME,
                port=s.PDF_SERVICES_PROXY_PORT,
                username=s.PDF_SERVICES_PROXY_USERNAME,
                password=s.PDF_SERVICES_PROXY_PASSWORD,
            )
        return cls(
            region=s.PDF_SERVICES_REGION,
            base_url=s.PDF_SERVICES_BASE_URL,
            ims_endpoint=s.PDF_SERVICES_IMS_ENDPOINT,
            connect_timeout=s.PDF_SERVICES_CONNECT_TIMEOUT,
            read_write_timeout=s.PDF_SERVICES_READ_WRITE_TIMEOUT,
            poll_interval=s.PDF_SERVICES_POLL_INTERVAL,
            max_wait_seconds=s.PDF_SERVICES_MAX_WAIT_SECONDS,
            proxy=proxy,
        )


# Global settings instance
settings = Settings()  # type: ignore
