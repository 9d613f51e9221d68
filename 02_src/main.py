"""Main entry point for topicflow."""

import os
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

from sim import Sim
from topicflow import Application, ConfigError, CycleError
from topicflow.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> int:
    """Run the configured topology under simulated input."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    setup_logging()

    # Get configuration from environment
    sim_topics = [t.strip() for t in os.getenv("SIM_TOPICS", "A,B").split(",") if t.strip()]
    sim_interval = float(os.getenv("SIM_INTERVAL", "0.1"))
    sim_duration = float(os.getenv("SIM_DURATION", "1.0"))

    app = Application()
    try:
        app.start()
    except (ConfigError, CycleError) as e:
        logger.error("Cannot start: %s", e)
        return 1

    logger.info("Topology: %s", app.graph().to_dict())

    sim = Sim(app.registry, topics=sim_topics, interval=sim_interval)
    sim.start()
    try:
        time.sleep(sim_duration)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        sim.stop()

    for topic in app.registry.all():
        last = topic.last_message
        logger.info("Topic %s = %s", topic.name, last.text if last else None)

    app.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
