"""
Explicit two-variant lookup result.

Parsers and lookups in this project never raise on bad input. They return either `Found(value)` or `NOT_FOUND`,
so the conversational layer can simply re-prompt the user.

    match algebraic_to_square("e4"):
        case Found(square):
            ...
        case NotFound():
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    """Nothing recognized. Carries no payload."""


NOT_FOUND = NotFound()

Lookup = Found[T] | NotFound
