"""Request and orchestration errors. Provider failures live in arena.providers.base."""

from arena.providers.base import ProviderError


class ValidationError(Exception):
    """Raised for a malformed debate request: no agents, bad round count, unknown provider."""


class OrchestrationError(Exception):
    """Raised when a provider fails mid-debate. The debate is abandoned."""

    def __init__(self, round_number: int, agent_name: str, cause: ProviderError) -> None:
        self.round_number = round_number
        self.agent_name = agent_name
        self.cause = cause
        super().__init__(f"Debate aborted in round {round_number} at {agent_name}: {cause}")
