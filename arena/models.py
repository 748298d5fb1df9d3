"""Pure data types for the debate pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from arena.providers.base import AIProvider


class ProviderKind(str, Enum):
    OPENAI = "openai"
    CLAUDE = "claude"
    GEMINI = "gemini"


@dataclass(frozen=True)
class Agent:
    name: str              # display only, never used for dispatch
    stance: str            # "pro", "con", "neutral", or free text
    provider: AIProvider


@dataclass(frozen=True)
class TranscriptEntry:
    round_number: int
    agent_name: str
    stance: str
    content: str

    def render(self) -> str:
        return f"{self.agent_name} ({self.stance}): {self.content}"


@dataclass
class Transcript:
    topic: str
    entries: list[TranscriptEntry] = field(default_factory=list)

    def header(self) -> str:
        return f"Debate Topic: {self.topic}"

    def render(self) -> str:
        """Full debate log: header line, then one entry per turn, each followed by a blank line."""
        parts = [f"{self.header()}\n\n"]
        parts.extend(f"{entry.render()}\n\n" for entry in self.entries)
        return "".join(parts)
