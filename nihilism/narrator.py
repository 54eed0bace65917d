"""Narrator — turns a player snapshot into the next narrative moment.

Flow for one generation:
  1. Render the player context (build_context) into the system prompt.
  2. Call the LLM with the system prompt and the turn request.
  3. Parse the reply into a NarrativeMoment.

The caller passes a snapshot of the player and appends the returned moment
itself (loops.append_moment) while holding exclusive access. Nothing here
touches shared state.

Generated output is untrusted. A reply that is not a JSON object is kept as
plain narration with the default choices; a reply whose text is empty is
rejected with NarrativeError.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from nihilism.context import build_context
from nihilism.llm import LLM
from nihilism.models import Choice, NarrativeMoment, Player
from nihilism.prompts import (
    CHOICE_PROMPT,
    NARRATOR_SYSTEM_PROMPT,
    OPENING_PROMPT,
    render_prompt,
)

logger = logging.getLogger(__name__)

MAX_CHOICES = 4

FALLBACK_CHOICES: list[Choice] = [
    Choice(id="continue", text="Continue..."),
    Choice(id="reset", text="Let the loop reset...", consequence_hint="End this iteration"),
]

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class NarrativeError(ValueError):
    """Raised when generated output cannot become a narrative moment."""


def build_system_prompt(player: Player) -> str:
    return render_prompt(
        NARRATOR_SYSTEM_PROMPT,
        {"context": build_context(player), "max_choices": str(MAX_CHOICES)},
    )


async def generate_moment(
    llm: LLM, player: Player, user_input: str | None = None
) -> NarrativeMoment:
    """Ask the LLM for the next moment given a player snapshot."""
    raw = await llm(build_system_prompt(player), user_input or OPENING_PROMPT)
    return parse_narrative(raw)


async def process_choice(llm: LLM, player: Player, choice: Choice) -> NarrativeMoment:
    """Continue the narrative after the player picked `choice`."""
    prompt = render_prompt(
        CHOICE_PROMPT,
        {"choice_text": choice.text, "total_loops": str(player.memory.total_loops)},
    )
    return await generate_moment(llm, player, prompt)


# ---------------------------------------------------------------------------
# Output parsing
# ---------------------------------------------------------------------------

def parse_narrative(raw: str) -> NarrativeMoment:
    content = raw.strip()
    match = _FENCE_RE.match(content)
    if match:
        content = match.group(1)

    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        data = None
    if not isinstance(data, dict):
        logger.warning("Narrator returned non-JSON output, using it as plain text")
        return _moment_from(text=raw.strip())

    text = data.get("text")
    if not isinstance(text, str):
        text = ""
    speaker = data.get("speaker")
    mood = data.get("mood")
    return _moment_from(
        text=text.strip(),
        speaker=speaker if isinstance(speaker, str) and speaker else None,
        mood=mood if isinstance(mood, str) and mood else "neutral",
        choices=_parse_choices(data.get("choices")),
    )


def _parse_choices(items: Any) -> list[Choice]:
    if not isinstance(items, list):
        return []
    choices: list[Choice] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        choice_id, text = item.get("id"), item.get("text")
        if not isinstance(choice_id, str) or not isinstance(text, str) or not choice_id or not text:
            logger.warning("Dropping malformed choice %r", item)
            continue
        hint = item.get("consequence_hint")
        choices.append(Choice(
            id=choice_id, text=text,
            consequence_hint=hint if isinstance(hint, str) else None,
        ))
    if len(choices) > MAX_CHOICES:
        logger.warning("Narrator offered %d choices, keeping %d", len(choices), MAX_CHOICES)
    return choices[:MAX_CHOICES]


def _moment_from(
    text: str,
    speaker: str | None = None,
    mood: str = "neutral",
    choices: list[Choice] | None = None,
) -> NarrativeMoment:
    if not text:
        raise NarrativeError("Narrator returned an empty moment")
    return NarrativeMoment(
        text=text,
        speaker=speaker,
        mood=mood,
        choices=choices or list(FALLBACK_CHOICES),
    )
