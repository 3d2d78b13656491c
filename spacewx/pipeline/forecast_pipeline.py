"""Forecast pipeline: bulletin text in, Kp, probabilities and day summaries out."""

import logging
from collections.abc import Callable
from datetime import datetime

from spacewx.config.schema import AppConfig
from spacewx.models.bulletin import BulletinMeta, ForecastReport
from spacewx.models.common import utc_now
from spacewx.parser.dates import first_year
from spacewx.parser.kp_bulletin import parse_kp_bulletin
from spacewx.parser.probability import parse_probabilities
from spacewx.reporting.daily import summarize_days

logger = logging.getLogger(__name__)


class ForecastPipeline:
    def __init__(
        self,
        config: AppConfig | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.config = config or AppConfig()
        self.clock = clock

    def run(self, text: str) -> ForecastReport:
        """Parse one bulletin.

        The Kp table's days are handed to the probability parser as a hint,
        and the :Issued: year as its fallback year.
        """
        now = self.clock()
        parser_config = self.config.parser

        kp = parse_kp_bulletin(text, parser_config, now=now)
        if not kp.kp_breakdown:
            logger.warning("Bulletin has no Kp breakdown rows (issued=%s)", kp.meta.issued)

        probabilities = parse_probabilities(
            text,
            fallback_year=fallback_year(kp.meta, now),
            hinted_days_iso=kp.days_iso,
            config=parser_config,
            now=now,
        )

        days = summarize_days(kp, probabilities) if self.config.output.include_days else []
        logger.info(
            "Parsed bulletin issued=%s: %d day(s), %d row(s), %d Kp point(s), "
            "%d solar / %d radio probabilities",
            kp.meta.issued, len(kp.days_iso), len(kp.kp_breakdown), len(kp.kp_series),
            len(probabilities.solar_by_day), len(probabilities.radio_by_day),
        )
        return ForecastReport(kp=kp, probabilities=probabilities, days=days)


def fallback_year(meta: BulletinMeta, now: datetime) -> int:
    """Year of the :Issued: stamp, else the current UTC year."""
    return first_year(meta.issued) or now.year
