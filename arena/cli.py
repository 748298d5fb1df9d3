"""Click CLI: serve the debate API, or run a single debate in the terminal."""

import asyncio
import logging
import sys
import time
from pathlib import Path

import click
import uvicorn
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from config.config_loader import AppConfig, load_config
from arena.debate import run_debate
from arena.errors import OrchestrationError, ValidationError
from arena.models import ProviderKind
from arena.output import print_debate_header, print_summary, print_turn
from arena.providers.base import AIProvider
from arena.providers.registry import build_alias_map, build_providers, resolve_agents
from arena.schemas import AgentDescriptor
from arena.server import create_app

logger = logging.getLogger(__name__)

console = Console(legacy_windows=False)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def _require_providers(config: AppConfig) -> dict[ProviderKind, AIProvider]:
    providers = build_providers(config)
    if not providers:
        console.print("[bold red]Error:[/bold red] No providers available. Check API keys in .env.")
        sys.exit(1)
    return providers


def _parse_agent(value: str) -> AgentDescriptor:
    """Parse NAME:STANCE[:PROVIDER]."""
    parts = [p.strip() for p in value.split(":")]
    if len(parts) not in (2, 3) or not all(parts):
        raise click.BadParameter(f"expected NAME:STANCE[:PROVIDER], got '{value}'")
    provider = None
    if len(parts) == 3:
        try:
            provider = ProviderKind(parts[2].lower())
        except ValueError:
            known = ", ".join(k.value for k in ProviderKind)
            raise click.BadParameter(f"unknown provider '{parts[2]}' (known: {known})") from None
    return AgentDescriptor(name=parts[0], stance=parts[1], provider=provider)


def _agents_option(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> list[AgentDescriptor]:
    return [_parse_agent(v) for v in values]


@click.group()
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to settings.yaml (default: bundled config)",
)
@click.option("--verbose", is_flag=True, help="Enable DEBUG-level logging")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """LLM Debate Arena -- sequential multi-provider debates.

    \b
    Examples:
      arena serve --port 5000
      arena debate "AI regulation" --rounds 1
      arena debate "Remote work" --agent Claude:pro --agent GPT-4:con
      arena debate "Nuclear power" --agent Skeptic:con:gemini --with-history
    """
    load_dotenv()
    _setup_logging(verbose)

    try:
        config = load_config(config_path) if config_path else load_config()
    except FileNotFoundError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        sys.exit(1)

    ctx.obj = config


@main.command()
@click.option("--host", default=None, help="Bind address (default: from config)")
@click.option("--port", default=None, type=int, help="Listening port (default: PORT env or config)")
@click.pass_obj
def serve(config: AppConfig, host: str | None, port: int | None) -> None:
    """Start the HTTP server."""
    providers = _require_providers(config)
    app = create_app(config, providers)

    effective_host = host or config.server.host
    effective_port = port if port is not None else config.server.port
    logger.info("Server running on http://%s:%d", effective_host, effective_port)

    # log_config=None keeps uvicorn on the RichHandler installed above
    uvicorn.run(app, host=effective_host, port=effective_port, log_config=None)


@main.command()
@click.argument("topic")
@click.option("--rounds", default=None, type=int, help="Number of rounds (default: from config)")
@click.option(
    "--agent", "agents", multiple=True, callback=_agents_option,
    help="Debater as NAME:STANCE[:PROVIDER]. Repeat in speaking order. Default: configured roster.",
)
@click.option("--with-history", is_flag=True, default=False, help="Feed earlier turns into each prompt")
@click.pass_obj
def debate(
    config: AppConfig,
    topic: str,
    rounds: int | None,
    agents: list[AgentDescriptor],
    with_history: bool,
) -> None:
    """Run one debate on TOPIC and print each turn."""
    providers = _require_providers(config)

    descriptors = agents or [
        AgentDescriptor(name=r.name, stance=r.stance, provider=r.provider)
        for r in config.defaults.roster
    ]
    effective_rounds = rounds if rounds is not None else config.defaults.rounds
    include_history = with_history or config.defaults.include_history

    try:
        resolved = resolve_agents(descriptors, providers, build_alias_map(config.aliases))
    except ValidationError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        sys.exit(1)

    print_debate_header(topic, resolved, effective_rounds)
    start = time.monotonic()

    try:
        transcript = asyncio.run(
            run_debate(
                topic=topic,
                agents=resolved,
                prompts=config.prompts,
                num_rounds=effective_rounds,
                include_history=include_history,
                on_turn_complete=print_turn,
            )
        )
    except (ValidationError, OrchestrationError) as exc:
        console.print(f"[bold red]Debate failed:[/bold red] {exc}")
        sys.exit(1)

    print_summary(transcript, time.monotonic() - start)


if __name__ == "__main__":
    main()
