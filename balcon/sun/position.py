from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime as DateTime
from datetime import date as Date
import math
import pytz
import astral
import astral.sun
from balcon.logging import ModuleLogger


DEFAULT_TZ = "Etc/UTC"

logger = ModuleLogger.get_logger(__name__)


@dataclass(frozen=True)
class SunPosition:
    """Position of the sun in the sky.

    Attributes
    ----------
    azimuth:
        Radians, measured from North and increasing toward East.
    altitude:
        Radians above the horizon; 0 at the horizon, pi/2 at the zenith.
    """
    azimuth: float
    altitude: float

    def __str__(self):
        return (
            f"azimuth {math.degrees(self.azimuth):.4f}° (CW N) | "
            f"altitude {math.degrees(self.altitude):.4f}°"
        )


@dataclass(frozen=True)
class DayWindow:
    """Sunrise and sunset on a given day at a given location.

    At polar latitudes the sun may not rise or set at all. Then `sunrise` and
    `sunset` are `None` and either `always_up` or `always_down` is set.
    """
    sunrise: DateTime | None
    sunset: DateTime | None
    always_up: bool = False
    always_down: bool = False

    @property
    def is_defined(self) -> bool:
        return self.sunrise is not None and self.sunset is not None


class SunPositionProvider(ABC):
    """Source of sun positions and sunrise/sunset times."""

    @abstractmethod
    def get_position(self, instant: DateTime, lat: float, lon: float) -> SunPosition:
        """Returns the position of the sun at `instant` seen from latitude
        `lat` and longitude `lon` (decimal degrees).
        """
        ...

    @abstractmethod
    def get_times(self, date: Date, lat: float, lon: float) -> DayWindow:
        """Returns sunrise and sunset on `date` at latitude `lat` and
        longitude `lon` (decimal degrees).
        """
        ...


class AstralSunProvider(SunPositionProvider):
    """
    Sun-position provider backed by the `astral` package.
    """

    def __init__(self, tz: str = DEFAULT_TZ, elevation: float = 0.0):
        """
        Parameters
        ----------
        tz: str
            Timezone (see tz database) in which naive instants are interpreted
            and in which sunrise and sunset are returned.
        elevation: float
            Elevation of the observer in metres.
        """
        self.tz = tz
        self.elevation = elevation
        self._tzinfo = pytz.timezone(tz)

    @property
    def tzinfo(self):
        return self._tzinfo

    def _observer(self, lat: float, lon: float) -> astral.Observer:
        return astral.Observer(
            latitude=lat,
            longitude=lon,
            elevation=self.elevation
        )

    def _localize(self, datetime: DateTime) -> DateTime:
        if datetime.tzinfo is None:
            # make naive datetime timezone aware using the timezone of the provider
            return self._tzinfo.localize(datetime, is_dst=True)
        return datetime.astimezone(self._tzinfo)

    def get_position(self, instant: DateTime, lat: float, lon: float) -> SunPosition:
        """
        Get position of the sun at the given instant.

        The azimuth returned by `astral` is measured clockwise from North in
        degrees, which only needs conversion to radians.
        """
        observer = self._observer(lat, lon)
        instant = self._localize(instant)
        azi = astral.sun.azimuth(observer, instant)
        elev = astral.sun.elevation(observer, instant)
        return SunPosition(azimuth=math.radians(azi), altitude=math.radians(elev))

    def get_times(self, date: Date, lat: float, lon: float) -> DayWindow:
        """
        Get sunrise and sunset at the given date in the timezone of the
        provider.
        """
        if isinstance(date, DateTime):
            date = date.date()
        observer = self._observer(lat, lon)
        try:
            sunrise = astral.sun.sunrise(observer, date, tzinfo=self._tzinfo)
        except ValueError:
            sunrise = None
        try:
            sunset = astral.sun.sunset(observer, date, tzinfo=self._tzinfo)
        except ValueError:
            sunset = None
        if sunrise is None and sunset is None:
            noon = astral.sun.noon(observer, date, tzinfo=self._tzinfo)
            always_up = astral.sun.elevation(observer, noon) > 0.0
            logger.warning(
                f"No sunrise or sunset on {date} at lat {lat:.4f}°, "
                f"lon {lon:.4f}°: sun is always {'up' if always_up else 'down'}"
            )
            return DayWindow(None, None, always_up=always_up, always_down=not always_up)
        return DayWindow(sunrise, sunset)
