"""
Configuration for the envelope cipher.

The application key is passed to EnvelopeCipher explicitly through a
Settings instance. Settings.from_env() is the one place that reads the
process environment (optionally seeded from a .env file).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger("envelope_cipher.config")

DEFAULT_KEY_ENV_VAR = "APP_KEY"


@dataclass(frozen=True)
class Settings:
    """Process configuration consumed by the cipher."""

    app_key: Optional[str] = None
    key_env_var: str = DEFAULT_KEY_ENV_VAR

    def __repr__(self) -> str:
        state = "set" if self.app_key else "unset"
        return f"Settings(key_env_var={self.key_env_var!r}, app_key=<{state}>)"

    @classmethod
    def from_env(
        cls,
        env_file: Optional[Union[str, Path]] = None,
        *,
        env_var: str = DEFAULT_KEY_ENV_VAR,
    ) -> Settings:
        """
        Build Settings from the environment.

        Args:
            env_file: Optional .env file to load first; without one, the
                nearest .env at or above the working directory is used.
                Variables already in the environment take precedence
            env_var: Name of the variable holding the application key

        Returns:
            Settings with app_key read from ``env_var`` (None if unset)
        """
        if env_file is not None:
            load_dotenv(env_file, override=False)
        else:
            load_dotenv(find_dotenv(usecwd=True), override=False)

        app_key = os.environ.get(env_var)
        logger.debug("Read %s from environment (%s)", env_var, "set" if app_key else "unset")
        return cls(app_key=app_key, key_env_var=env_var)
