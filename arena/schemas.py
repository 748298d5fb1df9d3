"""Request/response schemas for the debate API."""

from pydantic import BaseModel, Field

from arena.models import ProviderKind


class AgentDescriptor(BaseModel):
    """One debater as supplied by the client."""

    name: str = Field(..., min_length=1, description="Display name, e.g. 'GPT-4'")
    stance: str = Field(..., description="Rhetorical position, e.g. 'pro', 'con', 'neutral'")
    provider: ProviderKind | None = Field(
        None,
        description="Backend to use. When omitted the name is looked up in the alias table.",
    )


class DebateRequest(BaseModel):
    topic: str = Field(..., min_length=1, description="Motion under debate")
    rounds: int | None = Field(
        None, ge=1, description="Passes through the agent list (server default when omitted)"
    )
    agents: list[AgentDescriptor] = Field(..., min_length=1)


class DebateResponse(BaseModel):
    debate_log: str = Field(..., serialization_alias="debateLog")


class ErrorResponse(BaseModel):
    error: str


class ProviderHealth(BaseModel):
    ok: bool
    error: str = ""
