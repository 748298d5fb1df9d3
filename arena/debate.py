"""Debate orchestration: sequential turns, one provider call at a time."""

import logging
from collections.abc import Callable, Sequence

from config.config_loader import PromptsConfig
from arena.errors import OrchestrationError, ValidationError
from arena.models import Agent, Transcript, TranscriptEntry
from arena.providers.base import ProviderError

logger = logging.getLogger(__name__)


def _build_prompt(
    agent: Agent,
    topic: str,
    prompts: PromptsConfig,
    history: Sequence[TranscriptEntry],
) -> str:
    """Fill the turn template. History is embedded only when non-empty."""
    if history:
        return prompts.turn_with_history.format(
            name=agent.name,
            stance=agent.stance,
            topic=topic,
            history="\n\n".join(entry.render() for entry in history),
        )
    return prompts.turn.format(name=agent.name, stance=agent.stance, topic=topic)


async def run_debate(
    topic: str,
    agents: Sequence[Agent],
    prompts: PromptsConfig,
    num_rounds: int,
    include_history: bool = False,
    on_turn_complete: Callable[[TranscriptEntry], None] | None = None,
) -> Transcript:
    """Run the full debate across all rounds.

    Every round walks the agent list in order and awaits each provider before
    moving on, so the transcript order is round-major, then roster order.

    Args:
        topic: The motion being debated.
        agents: Ordered roster, each bound to a provider.
        prompts: Prompt templates from config.
        num_rounds: Number of passes through the roster.
        include_history: Feed earlier turns back into each prompt.
        on_turn_complete: Optional callback invoked after each turn.

    Returns:
        The completed Transcript.

    Raises:
        ValidationError: If the roster is empty or num_rounds < 1.
        OrchestrationError: On the first provider failure; nothing is kept.
    """
    if not agents:
        raise ValidationError("At least one agent is required")
    if num_rounds < 1:
        raise ValidationError(f"Round count must be positive, got {num_rounds}")

    transcript = Transcript(topic=topic)

    for round_num in range(1, num_rounds + 1):
        logger.info("Starting round %d with %d agents", round_num, len(agents))

        for agent in agents:
            history = transcript.entries if include_history else ()
            prompt = _build_prompt(agent, topic, prompts, history)
            logger.debug("Round %d prompt for %s: %s", round_num, agent.name, prompt)

            try:
                content = await agent.provider.generate(prompt)
            except ProviderError as exc:
                logger.error(
                    "Provider %s failed for %s in round %d: %s",
                    agent.provider.name(), agent.name, round_num, exc,
                )
                raise OrchestrationError(round_num, agent.name, exc) from exc

            entry = TranscriptEntry(
                round_number=round_num,
                agent_name=agent.name,
                stance=agent.stance,
                content=content,
            )
            transcript.entries.append(entry)

            if on_turn_complete:
                on_turn_complete(entry)

        logger.info("Round %d complete: %d turns so far", round_num, len(transcript.entries))

    return transcript
