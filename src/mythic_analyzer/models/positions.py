"""Line/character positions and ranges shared by every analysis artifact."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Position(BaseModel):
    """A 0-based (line, character) coordinate in a document."""

    model_config = ConfigDict(frozen=True)

    line: int
    character: int


class Range(BaseModel):
    """A span between two positions. The end position is exclusive."""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position


def pos_is_in(pos: Position, range_: Range) -> bool:
    """Check whether ``pos`` lies within ``range_``, both ends inclusive."""
    if range_.start.line < pos.line < range_.end.line:
        return True
    if pos.line == range_.start.line and pos.line == range_.end.line:
        return range_.start.character <= pos.character <= range_.end.character
    if pos.line == range_.start.line:
        return pos.character >= range_.start.character
    if pos.line == range_.end.line:
        return pos.character <= range_.end.character
    return False


def pos_cmp(a: Position, b: Position) -> int:
    """Order two positions: negative if ``a`` comes first, 0 if equal."""
    if a.line == b.line:
        return a.character - b.character
    return a.line - b.line
