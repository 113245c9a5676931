"""Agent backend configuration model."""

from pydantic import BaseModel, Field


class AgentsConfig(BaseModel, frozen=True):
    """Credentials and limits shared by every agent adapter.

    Empty API keys fall back to the SDKs' own environment lookup.
    """

    anthropic_api_key: str = ""
    openrouter_api_key: str = ""
    max_turns: int = Field(default=25, ge=1)
    max_tokens: int = Field(default=4096, ge=1)
