"""Which side does the user want to play? "white"/"light" or "black"/"dark"."""

import re

from src.core.result import NOT_FOUND, Found, Lookup
from src.core.shared_types import Color

COLOR_WORDS: dict[str, Color] = {
    "white": Color.WHITE,
    "light": Color.WHITE,
    "black": Color.BLACK,
    "dark": Color.BLACK,
}

COLOR_PATTERN = re.compile(r"\b(" + "|".join(COLOR_WORDS) + r")\b", re.IGNORECASE)


def parse_color_transcript(text: str) -> Lookup[Color]:
    """
    Case-insensitive, whole words only ("I'll take the dark pieces" works, "blackberry" does not).
    An utterance naming both colors is not understood.
    """
    if not text:
        return NOT_FOUND

    colors = {COLOR_WORDS[word.lower()] for word in COLOR_PATTERN.findall(text)}
    if len(colors) != 1:
        return NOT_FOUND
    return Found(colors.pop())
