"""Observer port for the config domain — defines events in domain language."""

from pathlib import Path
from typing import Protocol


class ConfigObserver(Protocol):
    def config_loaded(self, path: Path, suites_dir: Path, results_dir: Path) -> None: ...

    def config_defaults_used(self) -> None: ...
