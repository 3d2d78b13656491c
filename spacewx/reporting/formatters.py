"""Output formatters for forecast reports."""

import json

from spacewx.models.bulletin import ForecastReport


def _fmt(value: float | int | None, spec: str, suffix: str = "") -> str:
    return "-" if value is None else f"{value:{spec}}{suffix}"


def format_report_text(r: ForecastReport) -> str:
    """Plain text summary for the terminal."""
    issued = r.kp.meta.issued or "unknown"
    lines = [
        f"=== 3-Day Forecast | Issued {issued} ===",
        f"Greatest observed Kp: {_fmt(r.kp.summary.greatest_observed_kp, '.2f')} | "
        f"Greatest expected Kp: {_fmt(r.kp.summary.greatest_expected_kp, '.2f')}",
    ]
    if not r.days:
        lines.append("No forecast days found")
        return "\n".join(lines)

    lines.append(
        f"{'Day':<12}{'Kp avg':>8}{'Kp max':>8}{'Ap':>6}{'G':>4}{'Solar':>8}{'Radio':>8}"
    )
    for d in r.days:
        g = "-" if d.g_scale is None else f"G{d.g_scale}"
        lines.append(
            f"{d.day_iso:<12}"
            f"{_fmt(d.kp_avg, '.2f'):>8}"
            f"{_fmt(d.kp_max, '.2f'):>8}"
            f"{_fmt(d.ap, 'd'):>6}"
            f"{g:>4}"
            f"{_fmt(d.solar_pct, 'd', '%'):>8}"
            f"{_fmt(d.radio_pct, 'd', '%'):>8}"
        )
    lines.append(f"Kp blocks: {len(r.kp.kp_series)} over {len(r.kp.days_iso)} day(s)")
    return "\n".join(lines)


def format_report_json(r: ForecastReport, indent: int | None = 2) -> str:
    """JSON report for programmatic consumption."""
    return json.dumps(r.to_dict(), indent=indent or None)
