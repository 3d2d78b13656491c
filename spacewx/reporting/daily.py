"""Per-day roll-up of the parsed Kp series and probability tables."""

import math

from spacewx.models.bulletin import DaySummary, KpBulletin, ProbabilityResult

# ap equivalents for integer Kp 0..9
AP_TABLE = (0, 4, 7, 15, 27, 48, 80, 132, 207, 400)


def kp_to_ap(kp: float | None) -> int | None:
    """Approximate ap for a (possibly fractional) Kp by linear interpolation."""
    if kp is None or not math.isfinite(kp):
        return None
    if kp <= 0:
        return 0
    if kp >= 9:
        return AP_TABLE[-1]
    lo = math.floor(kp)
    frac = kp - lo
    # half-up rounding
    return math.floor(AP_TABLE[lo] + (AP_TABLE[lo + 1] - AP_TABLE[lo]) * frac + 0.5)


def g_scale(kp: float | None) -> int | None:
    """NOAA geomagnetic storm level: 0 below Kp 5, then G1..G5 for Kp 5..9."""
    if kp is None:
        return None
    if kp < 5:
        return 0
    return min(5, int(kp) - 4)


def summarize_days(kp: KpBulletin, probabilities: ProbabilityResult) -> list[DaySummary]:
    """Build one DaySummary per bulletin day.

    Days come from the Kp table; the probability day set is used only when
    the bulletin had no Kp table.
    """
    days = kp.days_iso or probabilities.days_iso
    by_day: dict[str, list[float]] = {d: [] for d in days}
    for point in kp.kp_series:
        values = by_day.get(point.iso[:10])
        if values is not None:
            values.append(point.kp)

    summaries = []
    for day in days:
        values = by_day[day]
        kp_avg = sum(values) / len(values) if values else None
        kp_max = max(values) if values else None
        summaries.append(
            DaySummary(
                day_iso=day,
                kp_avg=kp_avg,
                kp_max=kp_max,
                kp_blocks=len(values),
                ap=kp_to_ap(kp_avg),
                g_scale=g_scale(kp_max),
                solar_pct=probabilities.solar_by_day.get(day),
                radio_pct=probabilities.radio_by_day.get(day),
            )
        )
    return summaries
