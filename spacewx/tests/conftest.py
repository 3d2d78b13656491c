"""Shared test fixtures."""

from datetime import UTC, datetime
from pathlib import Path

import pytest
import yaml

from spacewx.config.schema import AppConfig

SAMPLE_BULLETIN = """\
:Product: 3-Day Forecast
:Issued: 2025 Oct 23 0030 UTC
# Prepared by the U.S. Dept. of Commerce, NOAA, Space Weather Prediction Center
#
A. NOAA Geomagnetic Activity Observation and Forecast

The greatest observed 3 hr Kp over the past 24 hours was 3 (below NOAA
Scale levels).
The greatest expected 3 hr Kp for Oct 23-Oct 25 2025 is 4.67 (NOAA Scale
G1).

NOAA Kp index breakdown Oct 23-Oct 25 2025

             Oct 23       Oct 24       Oct 25
00-03UT       2.00         3.33         1.00
03-06UT       2.33         3.67         1.33
06-09UT       1.67         4.67 (G1)    1.67
09-12UT       1.33         3.00         2.00
12-15UT       1.67         2.67         2.33
15-18UT       2.00         2.33         1.67
18-21UT       2.67         2.00         1.33
21-00UT       3.00         2.33         1.00

Rationale: G1 (Minor) geomagnetic storm levels are likely on 24 Oct due to
CH HSS influences.

B. NOAA Solar Radiation Activity Observation and Forecast

Solar radiation, as observed by NOAA GOES-18 over the past 24 hours, was
below S-scale storm level thresholds.

Solar Radiation Storm Forecast for Oct 23-Oct 25 2025

              Oct 23  Oct 24  Oct 25
S1 or greater    1%      1%      1%

Rationale: No S1 (Minor) or greater solar radiation storms are expected.

C. NOAA Radio Blackout Activity and Forecast

No radio blackouts were observed over the past 24 hours.

Radio Blackout Forecast for Oct 23-Oct 25 2025

              Oct 23        Oct 24        Oct 25
R1-R2            35%           35%           30%
R3 or greater    10%           10%           5%

Rationale: R1-R2 (Minor-Moderate) radio blackouts are likely.
"""

ROLLOVER_BULLETIN = """\
:Product: 3-Day Forecast
:Issued: 2024 Dec 30 1230 UTC

A. NOAA Geomagnetic Activity Observation and Forecast

The greatest observed 3 hr Kp over the past 24 hours was 2 (below NOAA
Scale levels).
The greatest expected 3 hr Kp for Dec 30-Jan 01 2025 is 3.33 (below NOAA
Scale levels).

NOAA Kp index breakdown Dec 30-Jan 01 2024

             Dec 30       Dec 31       Jan 1
00-03UT       2.00         3.33         1.00
21-00UT       3.00         2.33         1.00

Solar Radiation Storm Forecast for Dec 30-Jan 01

              Dec 30  Dec 31  Jan 01
S1 or greater    5%      5%      5%

Radio Blackout Forecast for Dec 30-Jan 01

              Dec 30        Dec 31        Jan 01
R1-R2            25%           25%           25%
"""

FIXED_NOW = datetime(2030, 6, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def sample_bulletin() -> str:
    return SAMPLE_BULLETIN


@pytest.fixture
def rollover_bulletin() -> str:
    return ROLLOVER_BULLETIN


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def default_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "parser": {"agency": "NOAA", "triplet_window": 20},
        "output": {"json_indent": 2},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def bulletin_path(tmp_path: Path) -> Path:
    path = tmp_path / "3-day-forecast.txt"
    path.write_text(SAMPLE_BULLETIN)
    return path
