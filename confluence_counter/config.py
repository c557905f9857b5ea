"""
Run configuration for the counter.

Settings come from the process environment, falling back to a .env file
(loaded with python-dotenv, which never overrides variables already set).
Everything the aggregator needs is collected into one CounterConfig that
is validated once, before any network I/O.
"""

import os
from pathlib import Path
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

from .exceptions import ConfigurationError
from .references import split_references
from .logger import get_module_logger

logger = get_module_logger("config")

# Environment variable names
ENV_URL = "CONFLUENCE_URL"
ENV_USERNAME = "CONFLUENCE_USERNAME"
ENV_API_TOKEN = "CONFLUENCE_API_TOKEN"
ENV_SPACE_KEY = "CONFLUENCE_SPACE_KEY"
ENV_PAGE_URLS = "CONFLUENCE_PAGE_URLS"

DEFAULT_TIMEOUT = 30.0
DEFAULT_PAGE_SIZE = 100


class CounterConfig(BaseModel):
    """Everything a run needs: where to connect, as whom, and what to scan."""
    base_url: Optional[str] = None
    username: Optional[str] = None
    api_token: Optional[str] = None
    space_key: Optional[str] = None                          # Whole-space mode
    page_urls: list[str] = Field(default_factory=list)        # Explicit-page mode (wins over space_key)
    timeout: float = DEFAULT_TIMEOUT
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)

    def missing_credentials(self) -> list[str]:
        missing = []
        if not self.base_url:
            missing.append(ENV_URL)
        if not self.username:
            missing.append(ENV_USERNAME)
        if not self.api_token:
            missing.append(ENV_API_TOKEN)
        return missing

    def validate_credentials(self) -> None:
        """Raise ConfigurationError if URL, username or token is missing."""
        missing = self.missing_credentials()
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}",
                missing=missing
            )

    def validate_target(self) -> None:
        """Raise ConfigurationError if there is neither a space key nor page URLs."""
        if not self.page_urls and not self.space_key:
            raise ConfigurationError(
                f"Either {ENV_SPACE_KEY} or {ENV_PAGE_URLS} must be provided",
                missing=[ENV_SPACE_KEY, ENV_PAGE_URLS]
            )

    def validate_all(self) -> None:
        self.validate_credentials()
        self.validate_target()


def load_config(env_file: Optional[Union[str, Path]] = None, **overrides) -> CounterConfig:
    """
    Build a CounterConfig from the environment.

    Args:
        env_file: Optional .env path (default: search from the working directory)
        **overrides: Explicit values (e.g. from CLI flags); None values are ignored

    Returns:
        CounterConfig (not yet validated)
    """
    if env_file is not None:
        loaded = load_dotenv(env_file)
    else:
        loaded = load_dotenv(find_dotenv(usecwd=True))
    if loaded:
        logger.debug("Loaded settings from .env")

    values = {
        "base_url": os.getenv(ENV_URL),
        "username": os.getenv(ENV_USERNAME),
        "api_token": os.getenv(ENV_API_TOKEN),
        "space_key": os.getenv(ENV_SPACE_KEY),
        "page_urls": split_references(os.getenv(ENV_PAGE_URLS, "")),
    }
    values.update({key: value for key, value in overrides.items() if value is not None})

    return CounterConfig(**values)
