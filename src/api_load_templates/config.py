"""Runtime settings read from the environment."""

import os
from typing import Literal

from pydantic import BaseModel, PositiveFloat

DEFAULT_TIMEOUT = 30.0


class Settings(BaseModel):
    """Settings shared by the CLI commands. Command options take precedence."""

    timeout: PositiveFloat = DEFAULT_TIMEOUT
    token: str | None = None
    store_path: str | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            timeout=os.getenv("API_LOAD_TIMEOUT", DEFAULT_TIMEOUT),
            token=os.getenv("API_TOKEN") or None,
            store_path=os.getenv("API_LOAD_STORE") or None,
            log_level=os.getenv("API_LOAD_LOG_LEVEL", "WARNING").upper(),
        )
