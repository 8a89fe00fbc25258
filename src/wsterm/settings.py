# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Application settings."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from wsterm.constants import (
    DEFAULT_OPEN_TIMEOUT_S,
    DEFAULT_OUTPUT_LIMIT,
    DEFAULT_PING_INTERVAL_S,
    DEFAULT_SERVER_URL,
)


class Settings(BaseSettings):
    server_url: str = DEFAULT_SERVER_URL
    token: str = ""
    log_level: str = "WARNING"
    output_limit: int = Field(default=DEFAULT_OUTPUT_LIMIT, ge=1)
    open_timeout: float = Field(default=DEFAULT_OPEN_TIMEOUT_S, gt=0)
    ping_interval: float | None = DEFAULT_PING_INTERVAL_S

    model_config = SettingsConfigDict(
        env_prefix="WSTERM_",
        extra="ignore",
    )
