from dataclasses import dataclass
from datetime import datetime as DateTime
from datetime import date as Date
from datetime import time as Time
from datetime import timedelta as TimeDelta
from datetime import tzinfo as TzInfo
from balcon.logging import ModuleLogger
from .position import SunPosition, SunPositionProvider, AstralSunProvider, DayWindow


logger = ModuleLogger.get_logger(__name__)

END_OF_DAY = Time(23, 59, 59, 999000)


@dataclass(frozen=True)
class SunSample:
    instant: DateTime
    position: SunPosition


def minute_of_day(instant: DateTime | Time) -> float:
    """Returns the number of minutes elapsed since midnight (with fraction)."""
    if isinstance(instant, DateTime):
        instant = instant.time()
    milliseconds = instant.hour * 3.6e6
    milliseconds += instant.minute * 6.0e4
    milliseconds += instant.second * 1.0e3
    milliseconds += instant.microsecond / 1.0e3
    return milliseconds / 6.0e4


def localize(instants: list[DateTime], tzinfo: TzInfo) -> list[DateTime]:
    """Attaches `tzinfo` to naive wall-clock instants."""
    # pytz timezones must localize, or they silently fall back to LMT
    if hasattr(tzinfo, 'localize'):
        return [tzinfo.localize(t, is_dst=True) for t in instants]
    return [t.replace(tzinfo=tzinfo) for t in instants]


def sample_instants(
    date: Date,
    interval_minutes: int,
    tzinfo: TzInfo | None = None
) -> list[DateTime]:
    """Returns the instants from midnight of `date` up to and including the
    last instant at or before 23:59:59.999, `interval_minutes` apart.

    The instants are naive wall-clock times; if `tzinfo` is a pytz timezone
    they are localized in it.
    """
    if isinstance(interval_minutes, bool) or not isinstance(interval_minutes, int) \
            or interval_minutes <= 0:
        raise ValueError(
            f'interval_minutes must be a positive integer, got {interval_minutes!r}'
        )
    if isinstance(date, DateTime):
        date = date.date()
    start = DateTime.combine(date, Time(0, 0, 0))
    end = DateTime.combine(date, END_OF_DAY)
    step = TimeDelta(minutes=interval_minutes)
    instants = []
    t = start
    while t <= end:
        instants.append(t)
        t += step
    if tzinfo is not None:
        instants = localize(instants, tzinfo)
    return instants


def sample_day(
    date: Date,
    lat: float,
    lon: float,
    interval_minutes: int = 15,
    provider: SunPositionProvider | None = None
) -> tuple[list[SunSample], DayWindow]:
    """Samples the position of the sun during a full civil day.

    Parameters
    ----------
    date:
        The calendar day; a time-of-day component is ignored.
    lat:
        Latitude in decimal degrees; north positive.
    lon:
        Longitude in decimal degrees; east positive.
    interval_minutes:
        Stride between successive samples.
    provider:
        Source of the sun positions. By default an `AstralSunProvider` in UTC.

    Returns
    -------
    The samples in chronological order and the sunrise/sunset window of the
    day, as returned by the provider.
    """
    provider = provider or AstralSunProvider()
    if isinstance(date, DateTime):
        date = date.date()
    tzinfo = getattr(provider, 'tzinfo', None)
    samples = [
        SunSample(instant=t, position=provider.get_position(t, lat, lon))
        for t in sample_instants(date, interval_minutes, tzinfo)
    ]
    day_window = provider.get_times(date, lat, lon)
    logger.debug(
        f"sampled {len(samples)} sun positions on {date} "
        f"at lat {lat:.4f}°, lon {lon:.4f}° every {interval_minutes} min"
    )
    return samples, day_window
