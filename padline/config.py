"""Configuration for padline using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RulesSettings(BaseSettings):
    """Settings for selecting padding rules."""

    model_config = SettingsConfigDict(
        env_prefix="RULES_",
    )

    ruleset: str = Field(
        default="none",
        description="Built-in ruleset to use when no rules or rules file are given",
    )

    rules_file: str | None = Field(
        default=None,
        description="Path to a rules file (YAML rulesets, or one rule string per line)",
    )

    rules_file_ruleset: str = Field(
        default="default",
        description="Ruleset to load from a YAML rules file",
    )

    rules: list[str] = Field(
        default_factory=list,
        description="Inline rule strings ('requirement:prev:next'), in precedence order",
    )


class LintSettings(BaseSettings):
    """Global settings for a lint run."""

    model_config = SettingsConfigDict(
        env_prefix="PADLINE_",
    )

    rules: RulesSettings = Field(default_factory=RulesSettings)
    ignore_patterns: list[str] = Field(
        default_factory=list,
        description="List of glob patterns to ignore files",
    )
    ignore_file_patterns: list[str] = Field(
        default_factory=lambda: ["**/.*ignore"],
        description="List of glob patterns to find ignore files (like .gitignore)",
    )


# Global settings instance that can be accessed throughout the application
_settings: LintSettings | None = None


def get_settings() -> LintSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = LintSettings()
    return _settings


def set_settings(settings: LintSettings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings
