"""Provider construction and agent-to-provider resolution."""

import logging
from collections.abc import Mapping, Sequence

from config.config_loader import AppConfig
from arena.errors import ValidationError
from arena.models import Agent, ProviderKind
from arena.providers.anthropic import AnthropicProvider
from arena.providers.base import AIProvider
from arena.providers.gemini import GeminiProvider
from arena.providers.openai_provider import OpenAIProvider
from arena.schemas import AgentDescriptor

logger = logging.getLogger(__name__)

PROVIDER_CLASSES: dict[ProviderKind, type[AIProvider]] = {
    ProviderKind.OPENAI: OpenAIProvider,
    ProviderKind.CLAUDE: AnthropicProvider,
    ProviderKind.GEMINI: GeminiProvider,
}


def build_providers(config: AppConfig) -> dict[ProviderKind, AIProvider]:
    """Build all available providers. Returns dict keyed by kind."""
    providers: dict[ProviderKind, AIProvider] = {}
    for name in sorted(config.available_providers):
        try:
            kind = ProviderKind(name)
        except ValueError:
            logger.warning("Provider '%s' unknown, skipping", name)
            continue
        model_cfg = config.models[name]
        try:
            providers[kind] = PROVIDER_CLASSES[kind](model_cfg)
        except Exception as exc:
            logger.warning("Failed to instantiate provider '%s': %s", name, exc)
    return providers


def build_alias_map(aliases: Mapping[str, str]) -> dict[str, ProviderKind]:
    """Normalize the display-name alias table. Kind values always resolve to themselves.

    Raises:
        ValueError: If an alias points at a provider kind that does not exist.
    """
    alias_map = {kind.value: kind for kind in ProviderKind}
    for alias, target in aliases.items():
        try:
            alias_map[alias.casefold()] = ProviderKind(target)
        except ValueError:
            raise ValueError(f"Alias '{alias}' points to unknown provider '{target}'") from None
    return alias_map


def resolve_agents(
    descriptors: Sequence[AgentDescriptor],
    providers: Mapping[ProviderKind, AIProvider],
    alias_map: Mapping[str, ProviderKind],
) -> list[Agent]:
    """Bind each descriptor to a configured provider, preserving roster order.

    Raises:
        ValidationError: If the roster is empty, a name cannot be mapped to a
            provider kind, or the kind has no configured provider.
    """
    if not descriptors:
        raise ValidationError("At least one agent is required")

    agents: list[Agent] = []
    for descriptor in descriptors:
        kind = descriptor.provider or alias_map.get(descriptor.name.casefold())
        if kind is None:
            raise ValidationError(
                f"Agent '{descriptor.name}' does not name a provider and matches no known alias"
            )
        provider = providers.get(kind)
        if provider is None:
            raise ValidationError(
                f"Agent '{descriptor.name}' needs provider '{kind.value}', which is not configured"
            )
        agents.append(Agent(name=descriptor.name, stance=descriptor.stance, provider=provider))
    return agents
