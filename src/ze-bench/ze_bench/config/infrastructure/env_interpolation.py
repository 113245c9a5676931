"""Recursive ${ENV_VAR} interpolation for raw config data.

Two reference forms are understood: ``${NAME}`` (required) and
``${NAME:-fallback}`` (optional, substituted with ``fallback`` when unset).
"""

import os
import re

_ENV_VAR_PATTERN = re.compile(
    r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<default>[^}]*))?\}"
)

type RawValue = (
    str | int | float | bool | None | list["RawValue"] | dict[str, "RawValue"]
)


def collect_missing_vars(data: RawValue) -> list[str]:
    """
    Walk the data tree and return the names of all required env vars that are
    not currently set. References with a fallback are never reported.
    """
    missing: list[str] = []
    _collect(data, missing)
    return missing


def _collect(data: RawValue, missing: list[str]) -> None:
    if isinstance(data, str):
        for match in _ENV_VAR_PATTERN.finditer(data):
            if match.group("default") is not None:
                continue
            var_name = match.group("name")
            if var_name not in os.environ and var_name not in missing:
                missing.append(var_name)
    elif isinstance(data, list):
        for item in data:
            _collect(item, missing)
    elif isinstance(data, dict):
        for value in data.values():
            _collect(value, missing)


def _substitute(match: re.Match[str]) -> str:
    fallback = match.group("default")
    if fallback is None:
        return os.environ[match.group("name")]
    return os.environ.get(match.group("name"), fallback)


def interpolate(data: RawValue) -> RawValue:
    """
    Recursively substitute every ${ENV_VAR} occurrence with its runtime value.

    Call `collect_missing_vars` first: a required variable that is unset
    raises KeyError here.
    """
    if isinstance(data, str):
        return _ENV_VAR_PATTERN.sub(_substitute, data)
    if isinstance(data, list):
        return [interpolate(item) for item in data]
    if isinstance(data, dict):
        return {key: interpolate(value) for key, value in data.items()}
    return data
