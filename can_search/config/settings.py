from __future__ import annotations

import os


class Settings:
    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Search scopes
    # Raise instead of warning when a scope kind or an existing named filter cannot be resolved
    CAN_SEARCH_STRICT: bool = os.getenv("CAN_SEARCH_STRICT", "False").lower() == "true"
    CAN_SEARCH_DEFAULT_PERIOD: str = os.getenv("CAN_SEARCH_DEFAULT_PERIOD", "daily")


settings = Settings()
