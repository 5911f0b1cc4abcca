"""Configuration management using Pydantic BaseSettings.

Settings for the GitHub REST client are read from environment variables
(and an optional ``.env`` file) with validation and numeric clamping.
"""

import logging
import math
from collections.abc import Callable
from functools import lru_cache
from typing import Any, TypeVar, cast

from annotated_types import Ge, Le
from pydantic import Field, SecretStr, ValidationInfo, field_validator, model_validator
from pydantic.fields import FieldInfo
from pydantic_core import Url
from pydantic_settings import BaseSettings, SettingsConfigDict

from .hosts import api_base_for_host

logger = logging.getLogger(__name__)

# Type variable for numeric clamping (int or float)
T = TypeVar("T", int, float)


def _clamp_numeric_value(
    v: Any,
    field_info: FieldInfo,
    cast_fn: Callable[[Any], T],
    validity_check: Callable[[T], bool] = lambda x: True,
) -> T:
    """Generic clamping logic for numeric values (int and float).

    Args:
        v: The value to validate and clamp
        field_info: Field metadata containing default and constraints
        cast_fn: Function to cast value to target type (int or float)
        validity_check: Optional predicate to check validity (e.g., math.isfinite)

    Returns:
        Clamped numeric value within field constraints
    """
    ge = _get_ge_constraint(field_info)
    le = _get_le_constraint(field_info)

    if v is None:
        default_val: T = field_info.default
        return default_val

    try:
        numeric_val = cast_fn(v)
    except (TypeError, ValueError):
        default_val = field_info.default
        return default_val

    if not validity_check(numeric_val):
        default_val = field_info.default
        return default_val

    if ge is not None:
        numeric_val = max(cast_fn(ge), numeric_val)
    if le is not None:
        numeric_val = min(cast_fn(le), numeric_val)

    return numeric_val


class ClientSettings(BaseSettings):
    """GitHub REST client configuration with validation and clamping.

    Out-of-range numeric values are clamped to their min/max bounds instead
    of raising.

    Environment Variables:
        GITHUB_TOKEN: GitHub token (optional; anonymous requests without it)
        GH_HOST: GitHub hostname (default: "github.com")
        GITHUB_API_URL: REST API base URL override (optional)
        HTTP_PER_PAGE: Default items per page for list calls
            (default: 30, range: 1-100)
        HTTP_TIMEOUT: Total HTTP timeout in seconds
            (default: 30.0, range: 1.0-300.0)
        HTTP_CONNECT_TIMEOUT: HTTP connection timeout in seconds
            (default: 10.0, range: 1.0-60.0)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
        frozen=True,
    )

    github_token: SecretStr | None = Field(
        default=None,
        description="GitHub token for API authentication",
    )
    gh_host: str = Field(
        default="github.com",
        description="GitHub hostname (use custom domain for GitHub Enterprise)",
    )
    github_api_url: str | None = Field(
        default=None,
        description="Override for GitHub REST API base URL (for enterprise instances)",
    )

    http_per_page: int = Field(
        default=30,
        ge=1,
        le=100,
        description="Number of items per page for list requests",
    )
    http_timeout: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Total HTTP timeout in seconds",
    )
    http_connect_timeout: float = Field(
        default=10.0,
        ge=1.0,
        le=60.0,
        description="HTTP connection timeout in seconds",
    )

    @field_validator("github_token", mode="before")
    @classmethod
    def validate_github_token(cls, v: Any) -> str | None:
        """Strip the token and reject whitespace-only values.

        Raises:
            ValueError: If token is not a string or is whitespace-only
        """
        if v is None or v == "":
            return None

        raw_value: str
        if isinstance(v, SecretStr):
            raw_value = v.get_secret_value()
        elif isinstance(v, str):
            raw_value = v
        else:
            msg = "GITHUB_TOKEN must be a string."
            raise ValueError(msg)

        token = raw_value.strip()
        if not token:
            msg = "GITHUB_TOKEN cannot be whitespace-only."
            raise ValueError(msg)

        return token

    @field_validator("github_api_url", mode="before")
    @classmethod
    def validate_url_format(cls, v: Any) -> str | None:
        """Validate URL structure if provided (HTTPS only).

        Args:
            v: The URL value to validate

        Returns:
            The validated HTTPS URL or None if not provided (empty/None)

        Raises:
            ValueError: If URL is provided but invalid (non-string, non-HTTPS,
                       malformed structure, contains spaces, or missing hostname)
        """
        if v is None or v == "":
            return None

        if not isinstance(v, str):
            msg = (
                f"URL must be a string, got {type(v).__name__}. "
                "Please provide a valid HTTPS URL."
            )
            raise ValueError(msg)

        if " " in v:
            msg = (
                f"URL contains spaces: {v!r}. "
                "URLs cannot contain spaces. Please provide a valid HTTPS URL."
            )
            raise ValueError(msg)

        v = v.strip()

        try:
            parsed = Url(v)
        except Exception as e:
            msg = f"Failed to parse URL {v!r}: {e}"
            raise ValueError(msg) from e

        if parsed.scheme != "https":
            msg = (
                f"Invalid URL scheme '{parsed.scheme}': {v!r}. "
                "Only HTTPS URLs are allowed."
            )
            raise ValueError(msg)

        if not parsed.host:
            msg = (
                f"URL is missing hostname: {v!r}. "
                "Please provide a complete HTTPS URL with a hostname."
            )
            raise ValueError(msg)

        # Keep the caller's spelling; str(parsed) would normalize it
        return cast(str, v)

    @field_validator("http_per_page", mode="before")
    @classmethod
    def clamp_int_values(cls, v: Any, info: ValidationInfo) -> int:
        """Clamp integer values to their field constraints."""
        field_name = info.field_name
        if field_name is None:
            msg = "Missing field_name in ValidationInfo"
            raise RuntimeError(msg)
        field_info = cls.model_fields[field_name]
        return _clamp_numeric_value(v, field_info, int)

    @field_validator("http_timeout", "http_connect_timeout", mode="before")
    @classmethod
    def clamp_float_values(cls, v: Any, info: ValidationInfo) -> float:
        """Clamp float values to their field constraints.

        NaN and infinite values are replaced with the field default.
        """
        field_name = info.field_name
        if field_name is None:
            msg = "Missing field_name in ValidationInfo"
            raise RuntimeError(msg)
        field_info = cls.model_fields[field_name]
        return _clamp_numeric_value(v, field_info, float, math.isfinite)

    @model_validator(mode="after")
    def validate_timeout_consistency(self) -> "ClientSettings":
        """Clamp the connect timeout so it never exceeds the total timeout."""
        if self.http_connect_timeout > self.http_timeout:
            old_connect_timeout = self.http_connect_timeout
            # Model is frozen
            object.__setattr__(self, "http_connect_timeout", self.http_timeout)
            logger.warning(
                "http_connect_timeout (%s) exceeded http_timeout (%s); clamped to %s",
                old_connect_timeout,
                self.http_timeout,
                self.http_timeout,
            )

        return self

    @property
    def api_base_url(self) -> str:
        """REST API base URL for the configured host, with trailing slash."""
        return api_base_for_host(self.gh_host, self.github_api_url)

    def token_value(self) -> str | None:
        if self.github_token is None:
            return None
        return self.github_token.get_secret_value()


@lru_cache
def get_settings() -> ClientSettings:
    """Get or create the global settings instance (thread-safe via lru_cache).

    Returns:
        ClientSettings instance loaded from environment
    """
    return ClientSettings()


def _get_ge_constraint(field_info: FieldInfo) -> int | float | None:
    """Extract the >= constraint value from field metadata."""
    for meta in field_info.metadata:
        if isinstance(meta, Ge):
            return cast(float | int | None, meta.ge)
    return None


def _get_le_constraint(field_info: FieldInfo) -> int | float | None:
    """Extract the <= constraint value from field metadata."""
    for meta in field_info.metadata:
        if isinstance(meta, Le):
            return cast(float | int | None, meta.le)
    return None
