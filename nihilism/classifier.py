"""Choice classification — decides whether a choice is dark or light.

The rest of the core only depends on the callable protocol:

    def __call__(self, choice_id: str, choice_text: str) -> bool: ...

True means dark. KeywordClassifier is the heuristic implementation used by
the service; a model-based classifier can replace it without touching
memory or loop handling.
"""

from __future__ import annotations

from typing import Protocol

DARK_ID_KEYWORDS: tuple[str, ...] = (
    "dark",
    "hurt",
    "ignore",
    "nihil",
    "cruel",
    "abandon",
)

DARK_TEXT_PHRASES: tuple[str, ...] = (
    "kill",
    "abandon",
    "nothing matters",
    "don't care",
    "meaningless",
    "leave them",
    "walk away",
)


class ChoiceClassifier(Protocol):
    def __call__(self, choice_id: str, choice_text: str) -> bool: ...


class KeywordClassifier:
    """Case-insensitive substring match against fixed keyword lists.

    A choice is dark if its id contains any id keyword or its display text
    contains any text phrase. Everything else, empty input included, is light.
    """

    def __init__(
        self,
        id_keywords: tuple[str, ...] = DARK_ID_KEYWORDS,
        text_phrases: tuple[str, ...] = DARK_TEXT_PHRASES,
    ) -> None:
        self._id_keywords = tuple(k.lower() for k in id_keywords)
        self._text_phrases = tuple(p.lower() for p in text_phrases)

    def __call__(self, choice_id: str, choice_text: str) -> bool:
        id_lower = choice_id.lower()
        text_lower = choice_text.lower()
        return any(k in id_lower for k in self._id_keywords) or any(
            p in text_lower for p in self._text_phrases
        )


_default = KeywordClassifier()


def classify(choice_id: str, choice_text: str) -> bool:
    """Classify with the default keyword heuristic. True means dark."""
    return _default(choice_id, choice_text)
