import math
from datetime import datetime as DateTime
from datetime import date as Date
from datetime import time as Time

import matplotlib

matplotlib.use('Agg')

import pytest

from balcon.sun import SunPosition, SunPositionProvider, DayWindow


class FakeSunProvider(SunPositionProvider):
    """Idealized sun: rises due East at 06:00, culminates due South at 12:00
    at `max_altitude` and sets due West at 18:00, on every day and at every
    location.
    """

    def __init__(self, max_altitude: float = math.pi / 3, window: DayWindow | None = None):
        self.max_altitude = max_altitude
        self.window = window
        self.position_calls = 0
        self.times_calls = 0

    def get_position(self, instant, lat, lon):
        self.position_calls += 1
        t = instant.hour * 60 + instant.minute + instant.second / 60
        azimuth = 2 * math.pi * t / 1440
        # exactly zero at 06:00 and 18:00
        altitude = round(self.max_altitude * math.sin(math.pi * (t - 360) / 720), 12)
        return SunPosition(azimuth=azimuth, altitude=altitude)

    def get_times(self, date, lat, lon):
        self.times_calls += 1
        if isinstance(date, DateTime):
            date = date.date()
        if self.window is not None:
            return self.window
        return DayWindow(
            sunrise=DateTime.combine(date, Time(6, 0)),
            sunset=DateTime.combine(date, Time(18, 0))
        )


@pytest.fixture
def provider() -> FakeSunProvider:
    return FakeSunProvider()


@pytest.fixture
def day() -> Date:
    return Date(2024, 6, 21)
