"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults matching the anchoring engine defaults

Collaborators:
  - main.py: reads settings for CORS, log level and startup validation
  - container.py: reads settings for FingerprintService configuration
  - routes.py: reads settings for request validation limits

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic, pure configuration

Notes:
  - Singleton via lru_cache
  - match_timeout_seconds <= 0 disables the scan time budget
  - Fuzzy matching is off by default (exact fingerprint parity)
"""

from functools import lru_cache

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        allowed_origins: Comma-separated CORS origins
        cors_allow_credentials: Allow cookies cross-origin (default: False)
        log_level: Logger level name (default: INFO)
        anchor_context_length: Context chars on each side of a selection (default: 100)
        anchor_snippet_length: Snippet length for the window scan (default: 100)
        match_timeout_seconds: Time budget per anchor relocation (default: 5.0)
        fuzzy_matching_enabled: Approximate fallback after exact miss (default: False)
        fuzzy_min_ratio: Minimum approximate score (default: 0.8)
        max_document_chars: Maximum document body length (default: 1_000_000)
        max_selection_chars: Maximum selected text length (default: 500)
        max_context_chars: Maximum length of each context window (default: 200)
        max_comment_chars: Maximum comment body length (default: 10_000)
        max_title_chars: Maximum text title length (default: 500)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = False

    # Observability
    log_level: str = "INFO"

    # Anchoring engine
    anchor_context_length: int = 100
    anchor_snippet_length: int = 100
    match_timeout_seconds: float = 5.0
    fuzzy_matching_enabled: bool = False
    fuzzy_min_ratio: float = 0.8

    # API limits
    max_document_chars: int = 1_000_000
    max_selection_chars: int = 500
    max_context_chars: int = 200
    max_comment_chars: int = 10_000
    max_title_chars: int = 500

    @field_validator("anchor_snippet_length", "max_document_chars", "max_selection_chars")
    @classmethod
    def must_be_positive(cls, v: int, info: ValidationInfo) -> int:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be greater than 0")
        return v

    @field_validator("anchor_context_length", "max_context_chars")
    @classmethod
    def must_be_non_negative(cls, v: int, info: ValidationInfo) -> int:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v

    @field_validator("fuzzy_min_ratio")
    @classmethod
    def ratio_in_range(cls, v: float) -> float:
        if not 0 < v <= 1:
            raise ValueError("fuzzy_min_ratio must be in (0, 1]")
        return v

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log_level: {v}")
        return level

    def validate_anchor_params(self) -> None:
        """
        Cross-field validation: stored context must fit the API limit.
        Called explicitly after instantiation.
        """
        if self.anchor_context_length > self.max_context_chars:
            raise ValueError(
                f"anchor_context_length ({self.anchor_context_length}) must not "
                f"exceed max_context_chars ({self.max_context_chars})"
            )

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    @property
    def match_timeout(self) -> float | None:
        """Scan time budget, or None when disabled."""
        return self.match_timeout_seconds if self.match_timeout_seconds > 0 else None


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
        ValueError: If cross-field validation fails
    """
    settings = Settings()
    settings.validate_anchor_params()
    return settings
