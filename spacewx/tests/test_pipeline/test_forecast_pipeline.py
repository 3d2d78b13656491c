"""Tests for the forecast pipeline wiring the two parsers together."""

from datetime import UTC, datetime

from spacewx.config.loader import set_config_value
from spacewx.config.schema import AppConfig
from spacewx.models.bulletin import BulletinMeta
from spacewx.pipeline.forecast_pipeline import ForecastPipeline, fallback_year

NO_PROBABILITY_DAYS = """\
:Issued: 2025 Oct 23 0030 UTC

NOAA Kp index breakdown Oct 23-Oct 25 2025

             Oct 23       Oct 24       Oct 25
00-03UT       2.00         3.33         1.00

Solar Radiation Storm Forecast

S1 or greater    1%      1%      1%

Radio Blackout Forecast

R1-R2            35%           35%           30%
"""


class TestForecastPipeline:
    def test_full_bulletin(self, sample_bulletin: str):
        report = ForecastPipeline().run(sample_bulletin)
        assert report.kp.days_iso == ["2025-10-23", "2025-10-24", "2025-10-25"]
        assert report.probabilities.days_iso == report.kp.days_iso
        assert len(report.days) == 3

    def test_kp_days_hint_probabilities(self):
        report = ForecastPipeline().run(NO_PROBABILITY_DAYS)
        assert list(report.probabilities.solar_by_day) == report.kp.days_iso
        assert report.probabilities.radio_by_day["2025-10-25"] == 30

    def test_rollover_uses_issued_year(self, rollover_bulletin: str, fixed_now: datetime):
        report = ForecastPipeline(clock=lambda: fixed_now).run(rollover_bulletin)
        assert report.probabilities.days_iso == ["2024-12-30", "2024-12-31", "2025-01-01"]
        assert report.days[2].solar_pct == 5

    def test_days_disabled(self, sample_bulletin: str):
        config = set_config_value(AppConfig(), "output.include_days", False)
        report = ForecastPipeline(config).run(sample_bulletin)
        assert report.days == []

    def test_no_table_logs_warning(self, caplog):
        with caplog.at_level("WARNING"):
            report = ForecastPipeline().run(":Issued: 2025 Oct 23 0030 UTC\n")
        assert report.kp.kp_breakdown == []
        assert "no Kp breakdown" in caplog.text

    def test_deterministic_with_fixed_clock(self, fixed_now: datetime):
        text = "Kp index breakdown Mar 1-Mar 3\nMar 1    Mar 2    Mar 3\n00-03UT  1.00  2.00  3.00\n"
        pipeline = ForecastPipeline(clock=lambda: fixed_now)
        assert pipeline.run(text) == pipeline.run(text)
        assert pipeline.run(text).kp.days_iso[0] == "2030-03-01"


class TestFallbackYear:
    def test_from_issued(self):
        now = datetime(2030, 1, 1, tzinfo=UTC)
        assert fallback_year(BulletinMeta(issued="2024 Dec 30 1230 UTC"), now) == 2024

    def test_from_clock(self):
        now = datetime(2030, 1, 1, tzinfo=UTC)
        assert fallback_year(BulletinMeta(), now) == 2030
