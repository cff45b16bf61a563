"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use SHORTSCAN_ prefix (e.g., SHORTSCAN_MAX_LIST_DEPTH=8).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use SHORTSCAN_ prefix.

    Examples:
        SHORTSCAN_PLACEHOLDER=@@SC@@
        SHORTSCAN_MAX_EMBED_PASSES=4
        SHORTSCAN_DEBUG_MODE=true
    """

    model_config = SettingsConfigDict(
        env_prefix="SHORTSCAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Locator configuration
    placeholder: str = Field(
        default="@@SHORTCODE_PLACEHOLDER@@",
        description="Fixed token written in place of every located shortcode",
    )

    max_list_depth: int = Field(
        default=32,
        ge=1,
        description="Deepest nesting of list literals accepted inside one argument",
    )

    # Insertion configuration
    max_embed_passes: int = Field(
        default=8,
        ge=1,
        description="Upper bound on rendering passes per file kind, the top-level pass included",
    )

    debug_mode: bool = Field(
        default=False,
        description="Enable debug output while locating",
    )

    @field_validator("placeholder")
    @classmethod
    def placeholder_check(cls, value: str) -> str:
        if not value:
            raise ValueError("placeholder must not be empty")
        if "{" in value or "}" in value:
            raise ValueError("placeholder must not contain '{' or '}'")
        return value

    def placeHolder_width(self) -> int:
        """
        Width of the placeholder in bytes.

        Every located shortcode's span in the rewritten string is exactly
        this wide.

        Example:
            >>> AppSettings().placeHolder_width()
            25
        """
        return len(self.placeholder.encode("utf-8"))

    def placeHolder_is(self, text: str) -> bool:
        """Check whether text is exactly the placeholder"""
        return text == self.placeholder


# Singleton instance - import this in your code
appsettings = AppSettings()
