"""Rich console output for debates run from the terminal."""

from collections.abc import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from arena.models import Agent, Transcript, TranscriptEntry

console = Console(legacy_windows=False)


def print_debate_header(topic: str, agents: Sequence[Agent], rounds: int) -> None:
    console.print(Rule(f"[bold cyan]Debate Topic: {topic}[/bold cyan]"))
    roster = ", ".join(
        f"{a.name} ({a.stance}, {a.provider.model_string()})" for a in agents
    )
    console.print(Text(f"Rounds: {rounds} | Agents: {roster}", style="dim"))


def print_turn(entry: TranscriptEntry) -> None:
    """Print a single completed turn as a panel."""
    console.print(
        Panel(
            entry.content,
            title=f"[bold]{entry.agent_name}[/bold] ({entry.stance})",
            subtitle=f"Round {entry.round_number}",
            border_style="dim",
        )
    )


def print_summary(transcript: Transcript, duration_sec: float) -> None:
    console.print(Rule("[bold green]Debate complete[/bold green]"))
    console.print(
        Text(f"Turns: {len(transcript.entries)} | Duration: {duration_sec:.1f}s", style="dim")
    )
