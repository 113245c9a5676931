"""Validation command value objects."""

from enum import StrEnum

from pydantic import BaseModel


class CommandKind(StrEnum):
    INSTALL = "install"
    TEST = "test"
    LINT = "lint"
    TYPECHECK = "typecheck"


# Kinds are executed in this order. TEST may be declared but is never run.
EXECUTION_ORDER: tuple[CommandKind, ...] = (
    CommandKind.INSTALL,
    CommandKind.LINT,
    CommandKind.TYPECHECK,
)

type CommandMap = dict[CommandKind, str]


class CommandResult(BaseModel, frozen=True):
    """Outcome of one executed validation command. Always fully populated."""

    kind: CommandKind
    raw: str
    exit_code: int
    stdout: str
    stderr: str
    duration_ms: int

    @property
    def passed(self) -> bool:
        return self.exit_code == 0
