"""YAML config loader — parses, interpolates env vars, validates, and emits observer events."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ze_bench.config.domain.config import BenchConfig
from ze_bench.config.domain.observer import ConfigObserver
from ze_bench.config.infrastructure.env_interpolation import (
    collect_missing_vars,
    interpolate,
)
from ze_bench.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)


class YamlConfigLoader:
    """Loads, interpolates, validates, and returns a BenchConfig from a YAML file."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path | None) -> BenchConfig:
        """
        Load, interpolate, validate, and return a BenchConfig.

        A ``None`` path yields the all-defaults config. Relative ``suites_dir``
        and ``results_dir`` are resolved against the config file's directory.

        Raises:
            ConfigLoadError: if the file is missing or is not valid YAML.
            MissingEnvVarsError: if any required ${ENV_VAR} is unset (all collected first).
            ConfigValidationError: if the schema is violated.
        """
        if path is None:
            self._observer.config_defaults_used()
            return BenchConfig()

        raw = _parse_yaml(path=path)
        _check_missing_env_vars(raw=raw)
        cfg = _build_config(resolved=interpolate(raw))
        cfg = _anchor_paths(cfg=cfg, base_dir=path.parent)
        self._observer.config_loaded(
            path=path, suites_dir=cfg.suites_dir, results_dir=cfg.results_dir
        )
        return cfg


def _parse_yaml(path: Path) -> Any:
    if not path.is_file():
        raise ConfigLoadError(path=path)
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason=f"invalid YAML ({exc})") from exc
    # An empty file parses to None; treat it as "all defaults".
    return raw if raw is not None else {}


def _check_missing_env_vars(raw: Any) -> None:
    """Raise MissingEnvVarsError if any required ${ENV_VAR} references are unset."""
    missing = collect_missing_vars(raw)
    if missing:
        raise MissingEnvVarsError(missing)


def _build_config(resolved: Any) -> BenchConfig:
    try:
        return BenchConfig.model_validate(resolved)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc


def _anchor_paths(cfg: BenchConfig, base_dir: Path) -> BenchConfig:
    updates: dict[str, Path] = {}
    if not cfg.suites_dir.is_absolute():
        updates["suites_dir"] = base_dir / cfg.suites_dir
    if not cfg.results_dir.is_absolute():
        updates["results_dir"] = base_dir / cfg.results_dir
    return cfg.model_copy(update=updates) if updates else cfg
