"""Configuration models and loading."""

from tokengov.config.schema import (
    DAY,
    MIN_VOTING_DURATION,
    MAX_VOTING_DURATION,
    AppConfig,
    GovernanceSettings,
    LoggingConfig,
)
from tokengov.config.env_loader import load_settings

__all__ = [
    "DAY",
    "MIN_VOTING_DURATION",
    "MAX_VOTING_DURATION",
    "AppConfig",
    "GovernanceSettings",
    "LoggingConfig",
    "load_settings",
]
