"""Load settings.yaml into typed dataclasses. Reports provider API keys at startup."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

_SETTINGS_PATH = Path(__file__).parent / "settings.yaml"

_PORT_ENV = "PORT"


@dataclass(frozen=True)
class ServerConfig:
    host: str
    port: int
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RosterEntry:
    name: str
    stance: str
    provider: str | None = None


@dataclass(frozen=True)
class DefaultsConfig:
    rounds: int
    max_rounds: int
    include_history: bool = False
    roster: list[RosterEntry] = field(default_factory=list)


@dataclass(frozen=True)
class ModelConfig:
    name: str
    sdk: str
    model: str
    api_key_env: str
    timeout_sec: int
    max_tokens: int
    base_url: str | None = None


@dataclass(frozen=True)
class PromptsConfig:
    turn: str
    turn_with_history: str


@dataclass(frozen=True)
class AppConfig:
    server: ServerConfig
    defaults: DefaultsConfig
    models: dict[str, ModelConfig]
    prompts: PromptsConfig
    aliases: dict[str, str] = field(default_factory=dict)
    available_providers: set[str] = field(default_factory=set)


def _load_server(raw: dict) -> ServerConfig:
    port = int(raw.get("port", 5000))
    env_port = os.environ.get(_PORT_ENV, "").strip()
    if env_port:
        port = int(env_port)
        logger.debug("Port overridden from %s: %d", _PORT_ENV, port)
    return ServerConfig(
        host=str(raw.get("host", "0.0.0.0")),
        port=port,
        cors_origins=[str(o) for o in raw.get("cors_origins", ["*"])],
    )


def load_config(settings_path: Path = _SETTINGS_PATH) -> AppConfig:
    """Load and validate configuration from settings.yaml.

    Raises FileNotFoundError if settings file missing.
    Logs providers whose API key is missing but does not raise; a request
    naming such a provider is rejected when it arrives.
    """
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    with settings_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    server = _load_server(raw.get("server", {}))

    defaults_raw = raw["defaults"]
    defaults = DefaultsConfig(
        rounds=int(defaults_raw["rounds"]),
        max_rounds=int(defaults_raw["max_rounds"]),
        include_history=bool(defaults_raw.get("include_history", False)),
        roster=[
            RosterEntry(
                name=str(entry["name"]),
                stance=str(entry["stance"]),
                provider=entry.get("provider"),
            )
            for entry in defaults_raw.get("roster", [])
        ],
    )

    prompts_raw = raw["prompts"]
    prompts = PromptsConfig(
        turn=prompts_raw["turn"],
        turn_with_history=prompts_raw["turn_with_history"],
    )

    models: dict[str, ModelConfig] = {}
    available_providers: set[str] = set()

    for provider_name, model_raw in raw["models"].items():
        model_cfg = ModelConfig(
            name=provider_name,
            sdk=model_raw["sdk"],
            model=model_raw["model"],
            api_key_env=model_raw["api_key_env"],
            timeout_sec=int(model_raw["timeout_sec"]),
            max_tokens=int(model_raw["max_tokens"]),
            base_url=model_raw.get("base_url"),
        )
        models[provider_name] = model_cfg

        api_key = os.environ.get(model_raw["api_key_env"], "").strip()
        if api_key:
            available_providers.add(provider_name)
            logger.info("Provider available: %s", provider_name)
        else:
            logger.warning(
                "Provider disabled (no API key): %s, set %s in .env",
                provider_name,
                model_raw["api_key_env"],
            )

    aliases = {str(k): str(v) for k, v in (raw.get("aliases") or {}).items()}

    return AppConfig(
        server=server,
        defaults=defaults,
        models=models,
        prompts=prompts,
        aliases=aliases,
        available_providers=available_providers,
    )
