# -*- coding: utf-8 -*-
"""Location: ./fragjson/config.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: fragjson contributors

fragjson Configuration.
This module defines configuration settings for the fragment decoder using Pydantic.
It loads configuration from environment variables with sensible defaults.

Environment variables:
- FRAGJSON_MAX_DEPTH: Maximum decode recursion depth (default: 200)
- FRAGJSON_MAX_TABLE_SIZE: Largest fragment table an override may create (default: 1000000)
- FRAGJSON_NUMBERS_AS_INDICES: Treat numeric fragments as table indices (default: True)
- FRAGJSON_OUTPUT_INDENT: Indentation of printed JSON (default: 4)
- FRAGJSON_ENSURE_ASCII: Escape non-ASCII characters in printed JSON (default: False)
- FRAGJSON_LOG_LEVEL: Logging level (default: "WARNING")
- FRAGJSON_LOG_FORMAT: Logging format string

Examples:
    >>> from fragjson.config import Settings
    >>> s = Settings(max_depth=50)
    >>> s.max_depth
    50
    >>> s.numbers_as_indices
    True
    >>> try:
    ...     Settings(max_depth=0)
    ... except ValueError as e:
    ...     print('error')
    error
"""

# Standard
from functools import lru_cache
import logging
import sys
from typing import Any, Literal

# Third-Party
import orjson
from pydantic import Field, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


class Settings(BaseSettings):
    """
    Fragment decoder configuration settings.

    Examples:
        >>> s = Settings()
        >>> s.max_depth
        200
        >>> s.output_indent
        4
        >>> s.log_level
        'WARNING'
        >>> Settings(numbers_as_indices=False).numbers_as_indices
        False
        >>> try:
        ...     Settings(max_depth=301)
        ... except ValueError:
        ...     print('error')
        error
        >>> try:
        ...     Settings(log_level='LOUD')
        ... except ValueError:
        ...     print('error')
        error
    """

    # Decoding
    # Upper bound kept below the interpreter's default recursion limit
    max_depth: int = Field(default=200, ge=1, le=300, description="Maximum recursion depth (nesting plus index hops) before decoding fails")
    max_table_size: PositiveInt = Field(default=1_000_000, description="Largest fragment table an override line may grow to")
    numbers_as_indices: bool = Field(default=True, description="Treat numeric fragments as fragment table indices; when false numbers are literals")

    # Output
    output_indent: int = Field(default=4, ge=0, le=16, description="Indentation used when printing decoded JSON")
    ensure_ascii: bool = Field(default=False, description="Escape non-ASCII characters in printed JSON")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="WARNING")
    log_format: str = LOG_FORMAT
    log_date_format: str = LOG_DATE_FORMAT

    model_config = SettingsConfigDict(env_prefix="FRAGJSON_", env_file=".env", env_file_encoding="utf-8", extra="ignore")

    def configure_logging(self) -> None:
        """Configure root logging with the configured level and format.

        Only the CLI calls this; library use leaves logging to the host application.
        """
        logging.basicConfig(level=self.log_level, format=self.log_format, datefmt=self.log_date_format)

    def log_summary(self) -> None:
        """
        Log a summary of the application settings at INFO level.

        Useful for debugging which environment values were picked up.
        """
        summary = self.model_dump()
        logger.info(f"Application settings summary: {summary}")


@lru_cache()
def get_settings(**kwargs: Any) -> Settings:
    """Get cached settings instance.

    Args:
        **kwargs: Keyword arguments to pass to the Settings setup.

    Returns:
        Settings: A cached instance of the Settings class.

    Examples:
        >>> settings = get_settings()
        >>> isinstance(settings, Settings)
        True
        >>> # Second call returns the same cached instance
        >>> settings2 = get_settings()
        >>> settings is settings2
        True
    """
    return Settings(**kwargs)


def generate_settings_schema() -> dict[str, Any]:
    """
    Return the JSON Schema describing the Settings model.

    Returns:
        dict: A dictionary representing the JSON Schema of the Settings model.

    Examples:
        >>> 'max_depth' in generate_settings_schema()['properties']
        True
    """
    return Settings.model_json_schema(mode="validation")


# Lazy "instance" of settings
class LazySettingsWrapper:
    """Lazily initialize settings singleton on getattr"""

    def __getattr__(self, key: str) -> Any:
        """Get the real settings object and forward to it

        Args:
            key: The key to fetch from settings

        Returns:
            Any: The value of the attribute on the settings
        """
        return getattr(get_settings(), key)


settings = LazySettingsWrapper()


if __name__ == "__main__":
    if "--schema" in sys.argv:
        schema = generate_settings_schema()
        print(orjson.dumps(schema, option=orjson.OPT_INDENT_2).decode())
        sys.exit(0)
    get_settings().configure_logging()
    settings.log_summary()
