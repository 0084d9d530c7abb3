"""
Environment Loading

Builds an AppConfig from an optional .env file and the process environment.

Usage:
    from tokengov.config import load_settings

    config = load_settings(Path(".env"))
    engine = GovernanceEngine.from_settings(config.governance, ...)

Recognised variables:
    TOKENGOV_VOTING_DURATION     seconds, 1..30 days
    TOKENGOV_PROPOSAL_THRESHOLD  minimum balance to create a proposal
    TOKENGOV_QUORUM_THRESHOLD    percent of total supply, 1..100
    TOKENGOV_LOG_LEVEL           DEBUG|INFO|WARNING|ERROR|CRITICAL
    TOKENGOV_LOG_JSON            true/false
    TOKENGOV_LOG_FILE            path of the rotating log file
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError

from tokengov.config.schema import AppConfig
from tokengov.errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "TOKENGOV_"

_GOVERNANCE_VARS = {
    "VOTING_DURATION": "voting_duration",
    "PROPOSAL_THRESHOLD": "proposal_threshold",
    "QUORUM_THRESHOLD": "quorum_threshold",
}

_LOGGING_VARS = {
    "LOG_LEVEL": "level",
    "LOG_JSON": "json_format",
    "LOG_FILE": "file_path",
}


def _collect(mapping: Dict[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for suffix, key in mapping.items():
        raw = os.getenv(ENV_PREFIX + suffix)
        if raw is not None and raw.strip() != "":
            values[key] = raw.strip()
    return values


def load_settings(env_file: Optional[Union[str, Path]] = None) -> AppConfig:
    """
    Load configuration from a .env file and the environment.

    The .env file is loaded with override=False, so variables already set
    in the process environment win.

    Raises:
        ConfigurationError: If any value fails validation
    """
    if env_file is not None:
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path, override=False)
            logger.debug(f"Loaded .env from {env_path}")
        else:
            logger.warning(f".env file not found: {env_path}")

    governance = _collect(_GOVERNANCE_VARS)
    logging_values = _collect(_LOGGING_VARS)

    try:
        config = AppConfig(governance=governance, logging=logging_values)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Invalid governance configuration: {e}",
            {"errors": e.errors(include_url=False)},
        ) from e

    logger.info(
        f"Governance settings: duration={config.governance.voting_duration}s "
        f"threshold={config.governance.proposal_threshold} "
        f"quorum={config.governance.quorum_threshold}%"
    )
    return config
