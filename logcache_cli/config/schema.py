"""Pydantic schema for configuration validation."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..core.constants import MetaDefaults, Scopes, TailDefaults


class EndpointConfig(BaseModel):
    """Where log-cache and the inventory API live, and how to authenticate.

    Resolved once before any command runs and passed explicitly to clients.
    """

    addr: Optional[str] = Field(default=None, description="log-cache base URL")
    api_addr: Optional[str] = Field(
        default=None, description="Cloud Controller base URL for name resolution"
    )
    access_token: Optional[str] = Field(
        default=None, description="Value sent in the Authorization header"
    )
    skip_auth: bool = Field(
        default=False, description="Send requests without an Authorization header"
    )

    @field_validator("addr", "api_addr")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        """Normalize base URLs so paths can be appended."""
        if v is None:
            return v
        v = v.strip()
        return v.rstrip("/") or None


class TailSettings(BaseModel):
    """Schema for tail command settings."""

    timeout: float = Field(
        default=TailDefaults.REQUEST_TIMEOUT,
        gt=0,
        description="Per-request timeout in seconds",
    )
    poll_interval: float = Field(
        default=TailDefaults.POLL_INTERVAL,
        ge=0,
        description="Delay between follow-mode polls in seconds",
    )
    lines: int = Field(
        default=TailDefaults.LINES,
        ge=1,
        le=1000,
        description="Envelopes requested by the first poll",
    )
    retention: float = Field(
        default=TailDefaults.RETENTION,
        ge=0,
        description="Seconds of dedup history kept behind the cursor",
    )


class MetaSettings(BaseModel):
    """Schema for meta command settings."""

    timeout: float = Field(default=MetaDefaults.REQUEST_TIMEOUT, gt=0)
    batch_size: int = Field(
        default=MetaDefaults.NAME_BATCH_SIZE,
        ge=1,
        le=MetaDefaults.NAME_BATCH_SIZE,
        description="Source ids per name lookup request",
    )
    scope: Literal["platform", "applications", "all"] = Field(default=Scopes.ALL)


class LoggingConfig(BaseModel):
    """Schema for logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="WARNING")
    file: Optional[str] = Field(default=None)

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v


class LogCacheConfig(BaseModel):
    """Root schema for log-cache CLI configuration."""

    endpoint: EndpointConfig = Field(default_factory=EndpointConfig)
    tail: TailSettings = Field(default_factory=TailSettings)
    meta: MetaSettings = Field(default_factory=MetaSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "forbid"}
