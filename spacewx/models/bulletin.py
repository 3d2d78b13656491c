"""Structured data parsed from the NOAA SWPC 3-Day Forecast bulletin.

Every model exposes ``to_dict()`` returning the camelCase shape consumed by
the rendering layer. All keys are always present; missing values are
``None``, an empty dict or an empty list.
"""

from dataclasses import dataclass, field
from typing import Any

from spacewx.models.common import IsoDay


@dataclass(frozen=True)
class BulletinMeta:
    issued: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"issued": self.issued}


@dataclass(frozen=True)
class Summary:
    greatest_observed_kp: float | None = None
    greatest_expected_kp: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "greatestObservedKp": self.greatest_observed_kp,
            "greatestExpectedKp": self.greatest_expected_kp,
        }


@dataclass(frozen=True)
class KpBreakdownRow:
    hour_block: str  # "HH-HH"
    values: dict[IsoDay, float | None] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"hourBlock": self.hour_block, **self.values}


@dataclass(frozen=True)
class KpSeriesPoint:
    iso: str  # UTC instant at the block's starting hour
    kp: float
    day_index: int

    def to_dict(self) -> dict[str, Any]:
        return {"iso": self.iso, "kp": self.kp, "dayIndex": self.day_index}


@dataclass(frozen=True)
class KpBulletin:
    meta: BulletinMeta = field(default_factory=BulletinMeta)
    summary: Summary = field(default_factory=Summary)
    kp_breakdown: list[KpBreakdownRow] = field(default_factory=list)
    days_label: list[str] = field(default_factory=list)
    days_iso: list[IsoDay] = field(default_factory=list)
    kp_series: list[KpSeriesPoint] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "meta": self.meta.to_dict(),
            "summary": self.summary.to_dict(),
            "kpBreakdown": [r.to_dict() for r in self.kp_breakdown],
            "daysLabel": list(self.days_label),
            "daysISO": list(self.days_iso),
            "kpSeries": [p.to_dict() for p in self.kp_series],
        }


@dataclass(frozen=True)
class ProbabilityResult:
    days_iso: list[IsoDay] = field(default_factory=list)
    solar_by_day: dict[IsoDay, int] = field(default_factory=dict)
    radio_by_day: dict[IsoDay, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "daysISO": list(self.days_iso),
            "solarByDay": dict(self.solar_by_day),
            "radioByDay": dict(self.radio_by_day),
        }


@dataclass(frozen=True)
class DaySummary:
    day_iso: IsoDay
    kp_avg: float | None
    kp_max: float | None
    kp_blocks: int
    ap: int | None
    g_scale: int | None
    solar_pct: int | None
    radio_pct: int | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "dayISO": self.day_iso,
            "kpAvg": self.kp_avg,
            "kpMax": self.kp_max,
            "kpBlocks": self.kp_blocks,
            "ap": self.ap,
            "gScale": self.g_scale,
            "solarPct": self.solar_pct,
            "radioPct": self.radio_pct,
        }


@dataclass(frozen=True)
class ForecastReport:
    kp: KpBulletin
    probabilities: ProbabilityResult
    days: list[DaySummary] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kp": self.kp.to_dict(),
            "probabilities": self.probabilities.to_dict(),
            "days": [d.to_dict() for d in self.days],
        }
