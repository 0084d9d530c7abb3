"""
Walk one proposal through its lifecycle on an in-memory ledger.

    python -m tokengov [--env-file .env]
"""

import argparse
import logging

from tokengov.config import DAY, load_settings
from tokengov.errors import GovernanceError
from tokengov.events import Event, EventBus
from tokengov.governance import GovernanceEngine
from tokengov.ledger import InMemoryTokenLedger, OwnerAccessGate
from tokengov.logging_config import setup_logging_from_config

logger = logging.getLogger("tokengov.demo")


def main() -> int:
    parser = argparse.ArgumentParser(description="tokengov lifecycle demo")
    parser.add_argument("--env-file", default=None, help="Optional .env file")
    args = parser.parse_args()

    config = load_settings(args.env_file)
    setup_logging_from_config(config.logging)

    ledger = InMemoryTokenLedger({"treasury": 849_000, "alice": 1_000, "bob": 150_000})
    bus = EventBus()

    @bus.subscribe("*")
    def audit(event: Event):
        logger.info(f"event {event.type}: {event.data}")

    engine = GovernanceEngine.from_settings(
        config.governance, ledger, OwnerAccessGate("treasury"), event_bus=bus
    )

    try:
        proposal_id = engine.create_proposal("alice", "Fund grants", "Allocate grants budget", now=0)
        engine.vote("bob", proposal_id, True, now=1 * DAY)

        ready, reason = engine.executor.check_executable(proposal_id, now=3 * DAY)
        logger.info(f"Executable at day 3: {ready} ({reason})")

        end_time = engine.get_proposal(proposal_id)["end_time"]
        engine.execute_proposal(proposal_id, now=end_time + DAY)
    except GovernanceError as e:
        logger.error(f"Demo failed: [{e.code}] {e.message}")
        return 1

    logger.info(f"Stats: {engine.get_stats()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
