"""Forward-only line cursor used by the bulletin parsers."""

import re
from collections.abc import Callable, Iterator
from enum import StrEnum


class ScanPhase(StrEnum):
    SEEK_ISSUED = "seek-issued"
    SEEK_SUMMARY = "seek-summary"
    SEEK_TABLE_TITLE = "seek-table-title"
    PARSE_HEADER = "parse-header"
    PARSE_ROWS = "parse-rows"
    SEEK_SECTION_SOLAR = "seek-section-solar"
    SEEK_SECTION_RADIO = "seek-section-radio"


def normalize_lines(text: str) -> list[str]:
    """Strip carriage returns and split into lines."""
    return text.replace("\r", "").split("\n")


class LineCursor:
    """Cursor over bulletin lines. Position only ever moves forward.

    Phases that need to start over from another position take a ``fork()``
    rather than rewinding.
    """

    def __init__(self, lines: list[str], pos: int = 0):
        self.lines = lines
        self.pos = max(0, min(pos, len(lines)))

    @classmethod
    def from_text(cls, text: str) -> "LineCursor":
        return cls(normalize_lines(text))

    @property
    def exhausted(self) -> bool:
        return self.pos >= len(self.lines)

    @property
    def current(self) -> str | None:
        return None if self.exhausted else self.lines[self.pos]

    def fork(self, pos: int | None = None) -> "LineCursor":
        return LineCursor(self.lines, self.pos if pos is None else pos)

    def advance(self, n: int = 1) -> None:
        self.pos = min(len(self.lines), self.pos + n)

    def seek(self, pattern: re.Pattern[str], window: int | None = None) -> re.Match[str] | None:
        """Move to the first line at or after the cursor that matches.

        ``window`` bounds the lookahead to that many lines, counting the
        current one. The cursor does not move when nothing matches.
        """
        end = len(self.lines) if window is None else min(len(self.lines), self.pos + window)
        for idx in range(self.pos, end):
            m = pattern.search(self.lines[idx])
            if m is not None:
                self.pos = idx
                return m
        return None

    def skip_blank(self) -> bool:
        """Advance past blank lines. False if the lines ran out."""
        while not self.exhausted and not self.lines[self.pos].strip():
            self.pos += 1
        return not self.exhausted

    def take_window(self, size: int) -> list[str]:
        """The next ``size`` lines starting at the cursor, without moving."""
        return self.lines[self.pos:self.pos + size]

    def consume_until(self, stop: Callable[[str], bool]) -> Iterator[str]:
        """Yield lines until ``stop`` is true for one; that line is not consumed."""
        while not self.exhausted:
            line = self.lines[self.pos]
            if stop(line):
                return
            self.pos += 1
            yield line
