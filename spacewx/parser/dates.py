"""Day-label, column and calendar helpers shared by the bulletin parsers."""

import re
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime

# Month abbreviation -> 0-based month index, as printed in bulletin headers
MONTHS: dict[str, int] = {
    "Jan": 0, "Feb": 1, "Mar": 2, "Apr": 3, "May": 4, "Jun": 5,
    "Jul": 6, "Aug": 7, "Sep": 8, "Oct": 9, "Nov": 10, "Dec": 11,
}
DECEMBER = MONTHS["Dec"]
JANUARY = MONTHS["Jan"]

DAYS_PER_TABLE = 3

# Bulletin columns are padded with at least two spaces; a single space
# belongs to the token ("Oct 23").
COLUMN_SPLIT_RE = re.compile(r"\s{2,}")
DAY_LABEL_RE = re.compile(r"^([A-Za-z]{3})\s+(\d{1,2})$")
_TRAILING_YEAR_RE = re.compile(r"(\d{4})\s*$")
_ANY_YEAR_RE = re.compile(r"(\d{4})")


@dataclass(frozen=True)
class DayTuple:
    label: str
    month: int  # 0-based
    day: int
    column: int
    year_offset: int = 0


@dataclass(frozen=True)
class ResolvedDay:
    label: str
    year: int
    month: int  # 0-based
    day: int
    column: int
    iso: str


def split_columns(line: str) -> list[str]:
    """Split a table line on runs of two or more whitespace characters."""
    tokens = (t.strip() for t in COLUMN_SPLIT_RE.split(line.strip()))
    return [t for t in tokens if t]


def parse_day_label(token: str) -> tuple[int, int] | None:
    """Parse "Oct 23" into (month index, day). None for anything else."""
    m = DAY_LABEL_RE.match(token.strip())
    if m is None:
        return None
    month = MONTHS.get(m.group(1).capitalize())
    if month is None:
        return None
    return month, int(m.group(2))


def extract_day_tuples(line: str, limit: int | None = DAYS_PER_TABLE) -> list[DayTuple]:
    """Pick the day-label tokens out of a header line, in column order."""
    tuples: list[DayTuple] = []
    for token in split_columns(line):
        parsed = parse_day_label(token)
        if parsed is None:
            continue
        month, day = parsed
        tuples.append(DayTuple(label=token, month=month, day=day, column=len(tuples)))
        if limit is not None and len(tuples) >= limit:
            break
    return tuples


def apply_year_rollover(tuples: list[DayTuple]) -> list[DayTuple]:
    """Bump the year from the first December -> January transition onwards.

    Only one rollover point is recognized per table.
    """
    for i in range(1, len(tuples)):
        if tuples[i - 1].month == DECEMBER and tuples[i].month == JANUARY:
            return tuples[:i] + [replace(t, year_offset=1) for t in tuples[i:]]
    return list(tuples)


def iso_day_key(year: int, month: int, day: int) -> str | None:
    """YYYY-MM-DD for a 0-based month, or None if the date does not exist."""
    try:
        return date(year, month + 1, day).isoformat()
    except ValueError:
        return None


def iso_block_timestamp(year: int, month: int, day: int, hour: int) -> str:
    """UTC instant of a block start, e.g. 2025-10-23T03:00:00.000Z."""
    dt = datetime(year, month + 1, day, hour, 0, 0, tzinfo=UTC)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.000Z")


def resolve_days(tuples: list[DayTuple], base_year: int) -> list[ResolvedDay]:
    """Apply rollover and attach calendar keys; impossible dates are dropped."""
    resolved: list[ResolvedDay] = []
    for t in apply_year_rollover(tuples):
        year = base_year + t.year_offset
        iso = iso_day_key(year, t.month, t.day)
        if iso is None:
            continue
        resolved.append(
            ResolvedDay(
                label=t.label,
                year=year,
                month=t.month,
                day=t.day,
                column=t.column,
                iso=iso,
            )
        )
    return resolved


def trailing_year(line: str | None) -> int | None:
    """A 4-digit year at the very end of a line."""
    if not line:
        return None
    m = _TRAILING_YEAR_RE.search(line)
    return int(m.group(1)) if m else None


def first_year(text: str | None) -> int | None:
    """The first 4-digit run in a string, e.g. the year of an :Issued: stamp."""
    if not text:
        return None
    m = _ANY_YEAR_RE.search(text)
    return int(m.group(1)) if m else None
