"""Parse the solar radiation storm and radio blackout probability tables."""

import logging
import re
from dataclasses import dataclass
from datetime import datetime

from spacewx.config.schema import ParserConfig
from spacewx.models.bulletin import ProbabilityResult
from spacewx.models.common import IsoDay, utc_now
from spacewx.parser.cursor import LineCursor, ScanPhase
from spacewx.parser.dates import (
    DAYS_PER_TABLE,
    extract_day_tuples,
    resolve_days,
    trailing_year,
)

logger = logging.getLogger(__name__)

SOLAR_HEADER_RE = re.compile(r"Solar\s+Radiation\s+Storm\s+Forecast", re.IGNORECASE)
RADIO_HEADER_RE = re.compile(r"Radio\s+Blackout\s+Forecast", re.IGNORECASE)

_PCT = r"(-?\d{1,3})\s*%"
_TRIPLET = rf"{_PCT}\s+{_PCT}\s+{_PCT}"

# Most specific first; the loose pattern accepts any line with three percentages.
_ANY_TRIPLET_RE = re.compile(_TRIPLET)
SOLAR_PATTERNS = (
    re.compile(rf"S1\s*or\s*greater\s+{_TRIPLET}", re.IGNORECASE),
    _ANY_TRIPLET_RE,
)
RADIO_PATTERNS = (
    re.compile(rf"R1\s*-\s*R2\s+{_TRIPLET}", re.IGNORECASE),
    re.compile(rf"R3\s*or\s*greater\s+{_TRIPLET}", re.IGNORECASE),
    _ANY_TRIPLET_RE,
)


@dataclass(frozen=True)
class _SectionScan:
    found: bool
    days: list[IsoDay]
    triplet: list[int] | None


def clamp_percent(value: int | float) -> int:
    """Clamp a probability to [0, 100]."""
    return int(min(100, max(0, value)))


def parse_probabilities(
    text: str,
    fallback_year: int | None = None,
    hinted_days_iso: list[IsoDay] | None = None,
    config: ParserConfig | None = None,
    now: datetime | None = None,
) -> ProbabilityResult:
    """Extract per-day solar radiation and radio blackout percentages.

    Each section is located and parsed independently, but both maps are
    keyed by one shared day set: the solar section's own days, else the
    radio section's own days, else ``hinted_days_iso`` when it holds
    exactly three entries. Every map key is therefore in ``days_iso``.
    """
    if config is None:
        config = ParserConfig()
    if not isinstance(text, str):
        text = ""
    year = fallback_year or (now or utc_now()).year

    cursor = LineCursor.from_text(text)
    solar = _scan_section(
        cursor.fork(0), ScanPhase.SEEK_SECTION_SOLAR, SOLAR_HEADER_RE, SOLAR_PATTERNS,
        year, config,
    )
    radio = _scan_section(
        cursor.fork(0), ScanPhase.SEEK_SECTION_RADIO, RADIO_HEADER_RE, RADIO_PATTERNS,
        year, config,
    )

    hint = list(hinted_days_iso or [])
    if solar.days:
        days = solar.days
    elif radio.days:
        days = radio.days
    elif len(hint) == DAYS_PER_TABLE:
        logger.debug("No section day header parsed, using hinted days %s", hint)
        days = hint
    else:
        days = []

    return ProbabilityResult(
        days_iso=list(days),
        solar_by_day=_index_by_day(solar, days),
        radio_by_day=_index_by_day(radio, days),
    )


def _scan_section(
    cursor: LineCursor,
    phase: ScanPhase,
    header_re: re.Pattern[str],
    patterns: tuple[re.Pattern[str], ...],
    fallback_year: int,
    config: ParserConfig,
) -> _SectionScan:
    if cursor.seek(header_re) is None:
        logger.debug("%s: section header not found", phase)
        return _SectionScan(found=False, days=[], triplet=None)

    days = _parse_local_days(cursor, fallback_year, config.day_header_window)
    triplet = _find_triplet(cursor.take_window(config.triplet_window), patterns)
    logger.debug("%s: days=%s triplet=%s", phase, days, triplet)
    return _SectionScan(found=True, days=days, triplet=triplet)


def _parse_local_days(
    cursor: LineCursor, fallback_year: int, window: int
) -> list[IsoDay]:
    """Find the first line within the window carrying three day labels."""
    header_line = cursor.current
    for line in cursor.take_window(window):
        tuples = extract_day_tuples(line, limit=None)
        if len(tuples) < DAYS_PER_TABLE:
            continue
        year = trailing_year(header_line) or trailing_year(line) or fallback_year
        days = resolve_days(tuples[:DAYS_PER_TABLE], year)
        if len(days) != DAYS_PER_TABLE:
            return []
        return [d.iso for d in days]
    return []


def _find_triplet(
    lines: list[str], patterns: tuple[re.Pattern[str], ...]
) -> list[int] | None:
    """Try each pattern across the whole window before falling back to the next."""
    for pattern in patterns:
        for line in lines:
            m = pattern.search(line)
            if m is not None:
                return [int(g) for g in m.groups()[-DAYS_PER_TABLE:]]
    return None


def _index_by_day(section: _SectionScan, days: list[IsoDay]) -> dict[IsoDay, int]:
    if not section.found or section.triplet is None:
        return {}
    if len(days) != DAYS_PER_TABLE:
        return {}
    return {day: clamp_percent(value) for day, value in zip(days, section.triplet)}
