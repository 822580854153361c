# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: kestrel
"""
Configuration for the kestrel DI system.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DISettings(BaseSettings):
    """
    Settings for service registries and scopes.
    Loads from ``KESTREL_DI_*`` environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="KESTREL_DI_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    reject_duplicate_registrations: bool = Field(
        default=False,
        description="Fail instead of replacing when a service is registered twice",
    )
    log_resolutions: bool = Field(
        default=False, description="Emit a debug record for every resolution"
    )

    @classmethod
    def load(cls) -> DISettings:
        return cls()
