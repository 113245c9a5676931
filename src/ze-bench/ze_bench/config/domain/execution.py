"""Execution configuration models."""

from pydantic import BaseModel, Field


class ExecutionConfig(BaseModel, frozen=True):
    # Caps the load-based lane count; None leaves it uncapped.
    max_concurrency: int | None = Field(default=None, ge=1)
    validation_timeout_seconds: float = Field(default=600.0, gt=0)
