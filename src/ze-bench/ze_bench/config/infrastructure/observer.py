"""Structlog implementation of the ConfigObserver port."""

from pathlib import Path

import structlog


class StructlogConfigObserver:
    """Delegates config domain events to structlog.

    Satisfies the ConfigObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def config_loaded(self, path: Path, suites_dir: Path, results_dir: Path) -> None:
        self._log.info(
            "config.loaded",
            path=str(path),
            suites_dir=str(suites_dir),
            results_dir=str(results_dir),
        )

    def config_defaults_used(self) -> None:
        self._log.info("config.defaults_used")
