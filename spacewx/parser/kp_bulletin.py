"""Parse issuance metadata, summary and the Kp breakdown table of a 3-Day Forecast."""

import logging
import math
import re
from datetime import datetime

from spacewx.config.schema import ParserConfig
from spacewx.models.bulletin import (
    BulletinMeta,
    KpBreakdownRow,
    KpBulletin,
    KpSeriesPoint,
    Summary,
)
from spacewx.models.common import utc_now
from spacewx.parser.cursor import LineCursor, ScanPhase
from spacewx.parser.dates import (
    ResolvedDay,
    extract_day_tuples,
    first_year,
    iso_block_timestamp,
    resolve_days,
    split_columns,
    trailing_year,
)

logger = logging.getLogger(__name__)

KP_MIN = 0.0
KP_MAX = 9.0

_ISSUED_RE = re.compile(r"^:Issued:\s*", re.IGNORECASE)
_OBSERVED_RE = re.compile(r"greatest observed.*?was\s+([0-9.]+)", re.IGNORECASE)
_EXPECTED_RE = re.compile(r"greatest expected.*?is\s+([0-9.]+)", re.IGNORECASE)
_TABLE_TITLE_RE = re.compile(r"Kp index breakdown", re.IGNORECASE)
_ROW_RE = re.compile(r"^(\d{2})-(\d{2})UT\s+(.+)$", re.IGNORECASE)
_RATIONALE_RE = re.compile(r"^Rationale:", re.IGNORECASE)
# Storm-level cells are printed as "5.67 (G2)"
_G_SCALE_SUFFIX_RE = re.compile(r"\s*\(G\d\)\s*$", re.IGNORECASE)


def parse_kp_bulletin(
    text: str,
    config: ParserConfig | None = None,
    now: datetime | None = None,
) -> KpBulletin:
    """Parse the Kp parts of a 3-Day Forecast bulletin.

    Never raises on malformed text: missing sections leave their fields
    empty. ``now`` supplies the year when neither the table title nor the
    :Issued: line carries one.
    """
    if not isinstance(text, str) or not text:
        return KpBulletin()
    if config is None:
        config = ParserConfig()

    cursor = LineCursor.from_text(text)
    meta = _seek_issued(cursor.fork(0))
    summary = _seek_summary(cursor.fork(0), config)

    table = cursor.fork(0)
    if table.seek(_TABLE_TITLE_RE) is None:
        logger.debug("%s: no Kp index breakdown title", ScanPhase.SEEK_TABLE_TITLE)
        return KpBulletin(meta=meta, summary=summary)

    year = _resolve_table_year(table.current, meta, now)
    table.advance()
    if not table.skip_blank():
        logger.debug("%s: nothing after table title", ScanPhase.PARSE_HEADER)
        return KpBulletin(meta=meta, summary=summary)

    days = resolve_days(extract_day_tuples(table.current), year)
    logger.debug(
        "%s: %d day column(s) %s, base year %d",
        ScanPhase.PARSE_HEADER, len(days), [d.iso for d in days], year,
    )
    table.advance()

    rows = _parse_rows(table, days)
    series = _flatten_series(days, rows)
    if config.sort_series:
        series.sort(key=lambda p: p.iso)

    return KpBulletin(
        meta=meta,
        summary=summary,
        kp_breakdown=rows,
        days_label=[d.label for d in days],
        days_iso=[d.iso for d in days],
        kp_series=series,
    )


def _seek_issued(cursor: LineCursor) -> BulletinMeta:
    if cursor.seek(_ISSUED_RE) is None:
        logger.debug("%s: no :Issued: line", ScanPhase.SEEK_ISSUED)
        return BulletinMeta()
    return BulletinMeta(issued=_ISSUED_RE.sub("", cursor.current, count=1).strip())


def _seek_summary(cursor: LineCursor, config: ParserConfig) -> Summary:
    header_re = re.compile(rf"^\s*A\.\s*{re.escape(config.agency)}", re.IGNORECASE)
    if cursor.seek(header_re) is None:
        logger.debug("%s: no 'A. %s' section", ScanPhase.SEEK_SUMMARY, config.agency)
        return Summary()
    block = "\n".join(cursor.take_window(config.summary_window))
    return Summary(
        greatest_observed_kp=_match_number(_OBSERVED_RE, block),
        greatest_expected_kp=_match_number(_EXPECTED_RE, block),
    )


def _match_number(pattern: re.Pattern[str], block: str) -> float | None:
    m = pattern.search(block)
    if m is None:
        return None
    try:
        return float(m.group(1))
    except ValueError:
        return None


def _resolve_table_year(title: str, meta: BulletinMeta, now: datetime | None) -> int:
    """Title year, then the :Issued: year, then the current UTC year."""
    year = trailing_year(title) or first_year(meta.issued)
    if year:
        return year
    return (now or utc_now()).year


def parse_kp_value(token: str | None) -> float | None:
    """Convert a table cell to a Kp value; blank, malformed or out-of-range -> None."""
    if token is None:
        return None
    token = _G_SCALE_SUFFIX_RE.sub("", token).strip()
    if not token:
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    if not math.isfinite(value) or not KP_MIN <= value <= KP_MAX:
        return None
    return value


def _is_table_end(line: str) -> bool:
    return not line.strip() or _RATIONALE_RE.match(line) is not None


def _parse_rows(cursor: LineCursor, days: list[ResolvedDay]) -> list[KpBreakdownRow]:
    rows: list[KpBreakdownRow] = []
    for line in cursor.consume_until(_is_table_end):
        m = _ROW_RE.match(line)
        if m is None:
            logger.debug("%s: skipping non-row line %r", ScanPhase.PARSE_ROWS, line)
            continue
        tokens = split_columns(m.group(3))
        values: dict[str, float | None] = {}
        for day in days:
            token = tokens[day.column] if day.column < len(tokens) else None
            values[day.iso] = parse_kp_value(token)
        rows.append(KpBreakdownRow(hour_block=f"{m.group(1)}-{m.group(2)}", values=values))
    return rows


def _flatten_series(
    days: list[ResolvedDay], rows: list[KpBreakdownRow]
) -> list[KpSeriesPoint]:
    """One point per non-null cell, emitted day by day."""
    series: list[KpSeriesPoint] = []
    for day_index, day in enumerate(days):
        for row in rows:
            kp = row.values.get(day.iso)
            if kp is None:
                continue
            hour = int(row.hour_block[:2])
            if hour > 23:
                logger.debug("%s: bad hour block %s", ScanPhase.PARSE_ROWS, row.hour_block)
                continue
            series.append(
                KpSeriesPoint(
                    iso=iso_block_timestamp(day.year, day.month, day.day, hour),
                    kp=kp,
                    day_index=day_index,
                )
            )
    return series
