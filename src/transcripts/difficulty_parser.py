"""
Difficulty choice: "easy"/"beginner", "medium", "hard"/"advanced".

This is the one asynchronous operation of the core: when the local vocabulary does not match, an external
phrase resolver (synonym / intent service) may be asked instead.
"""

import logging
import re
from typing import Optional, Protocol

from src.core.exceptions import ResolverError
from src.core.result import NOT_FOUND, Found, Lookup
from src.core.shared_types import Difficulty

logger = logging.getLogger(__name__)

DIFFICULTY_WORDS: dict[str, Difficulty] = {
    "easy": Difficulty.EASY,
    "beginner": Difficulty.EASY,
    "medium": Difficulty.MEDIUM,
    "hard": Difficulty.HARD,
    "advanced": Difficulty.HARD,
}

DIFFICULTY_PATTERN = re.compile(
    r"\b(" + "|".join(DIFFICULTY_WORDS) + r")\b", re.IGNORECASE
)


class PhraseResolver(Protocol):
    """External service mapping a free phrase ("something relaxed please") onto a difficulty."""

    async def resolve_difficulty(self, text: str) -> Optional[Difficulty]: ...


def match_difficulty(text: str) -> Lookup[Difficulty]:
    """Local vocabulary only. An utterance naming two different levels is not understood."""
    levels = {DIFFICULTY_WORDS[word.lower()] for word in DIFFICULTY_PATTERN.findall(text)}
    if len(levels) != 1:
        return NOT_FOUND
    return Found(levels.pop())


async def parse_difficulty_transcript(
    text: str, resolver: Optional[PhraseResolver] = None
) -> Lookup[Difficulty]:
    if not text:
        return NOT_FOUND

    local = match_difficulty(text)
    if isinstance(local, Found) or resolver is None:
        return local

    try:
        resolved = await resolver.resolve_difficulty(text)
    except ResolverError as exc:
        logger.warning("Phrase resolver failed for %r: %s", text, exc)
        return NOT_FOUND

    if resolved is None:
        return NOT_FOUND
    logger.debug("Phrase resolver mapped %r to %s", text, resolved)
    return Found(resolved)
