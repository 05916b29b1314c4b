"""
Settings of a daily profile calculation: the location, the rotation of the
structure and the day.

Default values are read from the environment (BALCON_DEFAULT_LAT,
BALCON_DEFAULT_LON, BALCON_DEFAULT_AZM); the location and rotation can be
shared through the query string of a link (`lat`, `lon`, `azm`).
"""
from dataclasses import dataclass, field, replace
from datetime import date as Date
from urllib.parse import parse_qs, urlencode
import math
import os
from balcon.logging import ModuleLogger
from balcon.sun import SunPositionProvider, AstralSunProvider, DailyProfile


logger = ModuleLogger.get_logger(__name__)

ENV_PREFIX = 'BALCON_DEFAULT_'

# Sevilla, with the southern wall facing true South
FALLBACK_LAT = 37.3891
FALLBACK_LON = -5.9845
FALLBACK_AZM = 0.0

RANGES: dict[str, tuple[float, float]] = {
    'lat': (-90.0, 90.0),
    'lon': (-180.0, 180.0),
    'azm': (-45.0, 45.0)
}


class SettingsError(ValueError):
    """Raised when a setting is outside its allowed range."""

    def __init__(self, name: str, value: object):
        lo, hi = RANGES.get(name, (None, None))
        if lo is not None:
            msg = f"setting '{name}' must be in [{lo:g}, {hi:g}], got {value!r}"
        else:
            msg = f"invalid value for setting '{name}': {value!r}"
        super().__init__(msg)
        self.name = name
        self.value = value


def _in_range(name: str, value: float) -> bool:
    lo, hi = RANGES[name]
    return not math.isnan(value) and lo <= value <= hi


def _parse(name: str, text: str | None) -> float | None:
    """Returns `text` as a float if it is a number within the range of setting
    `name`, else `None`.
    """
    if text is None:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if _in_range(name, value) else None


@dataclass(frozen=True)
class Settings:
    """
    Attributes
    ----------
    lat:
        Latitude in decimal degrees; -90 (S) to +90 (N).
    lon:
        Longitude in decimal degrees; -180 (W) to +180 (E).
    azm:
        Rotation of the structure in degrees; -45 to +45. At 0 the southern
        wall faces true South.
    date:
        The day to calculate.
    interval_minutes:
        Time between two samples of the sun position.
    timezone:
        Tz-database identifier in which the day and its instants are taken.
    """
    lat: float = FALLBACK_LAT
    lon: float = FALLBACK_LON
    azm: float = FALLBACK_AZM
    date: Date = field(default_factory=Date.today)
    interval_minutes: int = 15
    timezone: str = 'Etc/UTC'

    def validate(self) -> 'Settings':
        """Checks that all settings are within range and returns the settings
        themselves. Raises `SettingsError` otherwise.
        """
        for name in RANGES:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) \
                    or not _in_range(name, float(value)):
                raise SettingsError(name, value)
        if isinstance(self.interval_minutes, bool) \
                or not isinstance(self.interval_minutes, int) \
                or self.interval_minutes <= 0:
            raise SettingsError('interval_minutes', self.interval_minutes)
        return self

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None, **overrides) -> 'Settings':
        """Creates settings with the defaults taken from the environment.
        Missing or invalid environment values fall back to the built-in
        defaults.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in RANGES:
            key = ENV_PREFIX + name.upper()
            text = environ.get(key)
            value = _parse(name, text)
            if value is not None:
                values[name] = value
            elif text is not None:
                logger.warning(f"ignoring invalid {key}={text!r}")
        values.update(overrides)
        return cls(**values).validate()

    @classmethod
    def from_query(cls, query: str, base: 'Settings | None' = None) -> 'Settings':
        """Returns `base` updated with the `lat`, `lon` and `azm` parameters of
        a query string (with or without leading '?'). Parameters that are not
        a number or out of range are ignored.
        """
        base = base or cls()
        params = parse_qs(query.lstrip('?'))
        updates = {}
        for name in RANGES:
            texts = params.get(name)
            value = _parse(name, texts[-1]) if texts else None
            if value is not None:
                updates[name] = value
        return replace(base, **updates)

    def to_query(self) -> str:
        """Returns the query string that links to these settings."""
        return urlencode({
            'lat': f'{self.lat:.10g}',
            'lon': f'{self.lon:.10g}',
            'azm': f'{self.azm:.10g}'
        })

    def profile(self, provider: SunPositionProvider | None = None) -> DailyProfile:
        """Validates the settings and computes the daily profile. By default
        the sun positions come from astral in the timezone of the settings.
        """
        self.validate()
        provider = provider or AstralSunProvider(tz=self.timezone)
        return DailyProfile.compute(
            self.date, self.lat, self.lon, self.azm,
            interval_minutes=self.interval_minutes,
            provider=provider
        )
