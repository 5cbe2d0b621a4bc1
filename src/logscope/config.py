"""Configuration via pydantic-settings for the viewer shell.

The ingestion/render core takes no configuration; these settings only
affect how the CLI and the TUI present it.
"""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .render.markup import DEFAULT_PALETTE, MarkupClass


class Settings(BaseSettings):
    """Logscope configuration, loaded from env vars / .env file."""

    model_config = SettingsConfigDict(env_prefix="LOGSCOPE_", env_file=".env")

    key_color: str = Field(default=DEFAULT_PALETTE["key"], description="Style for object keys")
    string_color: str = Field(default=DEFAULT_PALETTE["string"], description="Style for string values")
    number_color: str = Field(default=DEFAULT_PALETTE["number"], description="Style for numbers")
    boolean_color: str = Field(default=DEFAULT_PALETTE["boolean"], description="Style for true/false")
    null_color: str = Field(default=DEFAULT_PALETTE["null"], description="Style for null")
    wrapper_color: str = Field(default=DEFAULT_PALETTE["wrapper"], description="Style for braces, brackets and commas")
    plain_color: str = Field(default=DEFAULT_PALETTE["plain"], description="Style for plain text")
    log_file: str = Field(default="", description="Write diagnostics here (the TUI owns the terminal)")
    log_level: str = Field(default="WARNING", description="Logging level name")
    mouse: bool = Field(default=True, description="Enable mouse support in the TUI")

    def palette(self) -> dict[str, str]:
        """Map each markup class to its configured rich style."""
        return {
            MarkupClass.KEY.value: self.key_color,
            MarkupClass.STRING.value: self.string_color,
            MarkupClass.NUMBER.value: self.number_color,
            MarkupClass.BOOLEAN.value: self.boolean_color,
            MarkupClass.NULL.value: self.null_color,
            MarkupClass.WRAPPER.value: self.wrapper_color,
            MarkupClass.PLAIN.value: self.plain_color,
        }
