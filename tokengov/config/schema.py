"""
Configuration validation with Pydantic.

Provides:
- GovernanceSettings: initial governance parameters and their bounds
- LoggingConfig: logging setup options
- AppConfig: top-level configuration
"""

from typing import Optional

from pydantic import BaseModel, Field

DAY = 24 * 60 * 60

MIN_VOTING_DURATION = DAY
MAX_VOTING_DURATION = 30 * DAY
DEFAULT_VOTING_DURATION = 7 * DAY
DEFAULT_PROPOSAL_THRESHOLD = 1000
DEFAULT_QUORUM_THRESHOLD = 10


class GovernanceSettings(BaseModel):
    """Initial governance parameters."""
    voting_duration: int = Field(
        ge=MIN_VOTING_DURATION, le=MAX_VOTING_DURATION, default=DEFAULT_VOTING_DURATION
    )
    proposal_threshold: int = Field(gt=0, default=DEFAULT_PROPOSAL_THRESHOLD)
    quorum_threshold: int = Field(ge=1, le=100, default=DEFAULT_QUORUM_THRESHOLD)


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    json_format: bool = False
    file_path: Optional[str] = None
    max_file_size_mb: int = Field(ge=1, le=1000, default=100)
    backup_count: int = Field(ge=0, le=100, default=5)


class AppConfig(BaseModel):
    """Main application configuration."""
    governance: GovernanceSettings = Field(default_factory=GovernanceSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
