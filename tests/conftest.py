"""Shared pytest fixtures."""

from collections.abc import AsyncIterator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from config.config_loader import (
    AppConfig,
    DefaultsConfig,
    ModelConfig,
    PromptsConfig,
    RosterEntry,
    ServerConfig,
)
from arena.models import Agent, ProviderKind
from arena.providers.base import AIProvider
from arena.server import create_app


@pytest.fixture
def sample_prompts_config() -> PromptsConfig:
    return PromptsConfig(
        turn='You are {name}, arguing {stance} on "{topic}". Respond to the previous point or start your argument.',
        turn_with_history='You are {name}, arguing {stance} on "{topic}".\n\nSo far:\n{history}\n\nRespond.',
    )


@pytest.fixture
def sample_defaults_config() -> DefaultsConfig:
    return DefaultsConfig(
        rounds=3,
        max_rounds=10,
        include_history=False,
        roster=[RosterEntry("GPT-4", "pro"), RosterEntry("Gemini", "neutral")],
    )


@pytest.fixture
def sample_app_config(
    sample_defaults_config: DefaultsConfig,
    sample_prompts_config: PromptsConfig,
) -> AppConfig:
    model_cfg = ModelConfig(
        name="claude",
        sdk="anthropic",
        model="claude-3-5-sonnet-latest",
        api_key_env="CLAUDE_API_KEY",
        timeout_sec=60,
        max_tokens=1024,
    )
    return AppConfig(
        server=ServerConfig(host="127.0.0.1", port=5000),
        defaults=sample_defaults_config,
        models={"claude": model_cfg},
        prompts=sample_prompts_config,
        aliases={"GPT-4": "openai", "Claude": "claude", "Gemini": "gemini"},
        available_providers={"claude"},
    )


class MockProvider(AIProvider):
    """Test double AIProvider."""

    def __init__(self, provider_name: str = "mock", response_content: str = "Mock response") -> None:
        self._name = provider_name
        self._response_content = response_content
        # Shadow the class method with an AsyncMock at the instance level.
        # ABC check passes because generate is defined in the class body below.
        self.generate = AsyncMock(return_value=response_content)  # type: ignore[assignment]

    def name(self) -> str:
        return self._name

    def model_string(self) -> str:
        return "mock-model"

    async def generate(self, prompt: str) -> str:  # type: ignore[override]
        """Default implementation; replaced by AsyncMock in __init__."""
        return self._response_content


@pytest.fixture
def two_agents() -> list[Agent]:
    return [
        Agent("GPT-4", "pro", MockProvider("openai", "Regulate now.")),
        Agent("Gemini", "neutral", MockProvider("gemini", "It depends.")),
    ]


@pytest.fixture
def mock_providers() -> dict[ProviderKind, MockProvider]:
    return {
        ProviderKind.OPENAI: MockProvider("openai", "Response from OpenAI"),
        ProviderKind.CLAUDE: MockProvider("claude", "Response from Claude"),
        ProviderKind.GEMINI: MockProvider("gemini", "Response from Gemini"),
    }


@pytest.fixture
async def client(
    sample_app_config: AppConfig,
    mock_providers: dict[ProviderKind, MockProvider],
) -> AsyncIterator[AsyncClient]:
    """httpx client bound to an app wired with mock providers."""
    app = create_app(sample_app_config, mock_providers)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
