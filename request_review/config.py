import os
import logging
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict, model_validator
from dotenv import load_dotenv

from .constants import HTTP_DEFAULT_TIMEOUT

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ('true', '1', 'yes')


class Settings(BaseModel):
    """
    Configuration settings for the registration request review service.
    """
    # Backend connection
    api_base_url: str = Field(
        default_factory=lambda: os.getenv('REVIEW_API_BASE_URL', 'http://localhost:8080/docs-web/api'),
        description="Backend REST API root"
    )
    auth_token: Optional[str] = Field(
        default_factory=lambda: os.getenv('REVIEW_AUTH_TOKEN') or None,
        description="Value of the backend auth_token cookie"
    )
    http_timeout: float = Field(
        default_factory=lambda: float(os.getenv('REVIEW_HTTP_TIMEOUT', str(HTTP_DEFAULT_TIMEOUT))),
        description="Backend request timeout in seconds, 0 disables it"
    )
    verify_ssl: bool = Field(
        default_factory=lambda: _env_bool('REVIEW_VERIFY_SSL', 'true'),
        description="Verify backend TLS certificates"
    )

    # Controller behaviour
    load_on_startup: bool = Field(
        default_factory=lambda: _env_bool('REVIEW_LOAD_ON_STARTUP', 'true'),
        description="Fetch pending requests when the application starts"
    )

    # Server settings
    host: str = Field(
        default_factory=lambda: os.getenv('REVIEW_HOST', '0.0.0.0'),
        description="Bind address"
    )
    port: int = Field(
        default_factory=lambda: int(os.getenv('REVIEW_PORT', '11000')),
        description="Bind port"
    )
    cors_allow_origins: str = Field(
        default_factory=lambda: os.getenv('CORS_ALLOW_ORIGINS', 'http://localhost:3000'),
        description="Comma separated CORS origins or '*'"
    )

    # Logging settings
    debug: bool = Field(
        default_factory=lambda: _env_bool('REVIEW_DEBUG', 'false'),
        description="Enable debug logging"
    )

    model_config = ConfigDict(extra='ignore')

    @property
    def timeout(self) -> Optional[float]:
        # 0 означает "без таймаута"
        return self.http_timeout if self.http_timeout > 0 else None

    @property
    def log_level(self) -> int:
        return logging.DEBUG if self.debug else logging.INFO

    @property
    def allow_origins(self) -> List[str]:
        if self.cors_allow_origins.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]

    @model_validator(mode='after')
    def validate_settings(self):
        if not self.api_base_url:
            raise ValueError("REVIEW_API_BASE_URL must be set")
        if self.http_timeout < 0:
            raise ValueError("REVIEW_HTTP_TIMEOUT must not be negative")
        return self

    def configure_logging(self):
        """
        Configure logging based on debug setting
        """
        if not logging.root.handlers:
            logging.basicConfig(
                level=self.log_level,
                format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
        logging.getLogger("request_review").setLevel(self.log_level)
        return self.log_level
