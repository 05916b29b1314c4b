from datetime import datetime as DateTime
from datetime import date as Date
import math
import numpy as np
import pandas as pd
from balcon import Quantity
from .position import SunPositionProvider, DayWindow
from .sampling import SunSample, sample_day
from .surface import Surface, structure_orientations
from .irradiance import ClearSkyAtmosphere, DEFAULT_ATMOSPHERE, intensity_array


Q_ = Quantity

SUNLIT_THRESHOLD = 1e-12


def bar_opacity(intensity: float | np.ndarray) -> float | np.ndarray:
    """Maps intensity onto the opacity of a chart bar segment. Intensities
    of 0.5 and higher are drawn fully opaque.
    """
    opacity = np.minimum(2.0 * np.asarray(intensity, dtype=float), 1.0)
    return float(opacity) if opacity.ndim == 0 else opacity


class DailyProfile:
    """Intensity of direct sunlight on each face of a structure during one
    day, sampled at regular intervals.

    Attributes
    ----------
    samples:
        The sun positions during the day in chronological order.
    day_window:
        Sunrise and sunset on that day.
    azm:
        Rotation of the structure in decimal degrees.
    atmosphere:
        Parameters of the clear-sky transmittance law.
    """

    def __init__(
        self,
        samples: list[SunSample],
        day_window: DayWindow,
        azm: float = 0.0,
        atmosphere: ClearSkyAtmosphere = DEFAULT_ATMOSPHERE
    ):
        self.samples = samples
        self.day_window = day_window
        self.azm = azm
        self.atmosphere = atmosphere
        self._positions: pd.DataFrame | None = None
        self._table: pd.DataFrame | None = None
        self._create_table()

    @classmethod
    def compute(
        cls,
        date: Date,
        lat: float,
        lon: float,
        azm: float = 0.0,
        interval_minutes: int = 15,
        provider: SunPositionProvider | None = None,
        atmosphere: ClearSkyAtmosphere = DEFAULT_ATMOSPHERE
    ) -> 'DailyProfile':
        """Samples the sun during the given day at the given location and
        returns the intensity profile of a structure rotated by `azm` degrees.
        """
        samples, day_window = sample_day(date, lat, lon, interval_minutes, provider)
        return cls(samples, day_window, azm, atmosphere)

    def _create_table(self):
        index = pd.Index([s.instant for s in self.samples], name='time')
        azi = np.array([s.position.azimuth for s in self.samples], dtype=float)
        alt = np.array([s.position.altitude for s in self.samples], dtype=float)
        self._positions = pd.DataFrame(
            data={'azimuth': azi, 'altitude': alt},
            index=index
        )
        columns = {}
        for surface, orientation in structure_orientations(self.azm).items():
            columns[surface.label] = np.atleast_1d(intensity_array(
                azi, alt,
                orientation.azimuth, orientation.tilt,
                self.atmosphere
            ))
        self._table = pd.DataFrame(data=columns, index=index)

    @property
    def table(self) -> pd.DataFrame:
        """
        Returns a Pandas DataFrame with the intensity on each surface (columns
        labelled East, South, West, North, Roof) at each sampled instant.
        """
        return self._table

    @property
    def positions(self) -> pd.DataFrame:
        """Returns a Pandas DataFrame with the azimuth and altitude of the sun
        in radians at each sampled instant.
        """
        return self._positions

    @property
    def instants(self) -> list[DateTime]:
        return [s.instant for s in self.samples]

    def intensity(self, surface: Surface) -> np.ndarray:
        """Get the intensity on `surface` at each sampled instant."""
        return self._table[surface.label].to_numpy()

    def intensity_quantity(self, surface: Surface) -> Quantity:
        """Same as `intensity`, but as a `Quantity` array in fractions."""
        return Q_(self.intensity(surface), 'frac')

    def opacity(self, surface: Surface) -> np.ndarray:
        """Get the opacity of each bar segment of `surface` on the chart."""
        return bar_opacity(self.intensity(surface))

    def time_at(self, fraction: float) -> DateTime:
        """
        Returns the instant that corresponds with a horizontal position on the
        chart, given as a fraction of the chart width (0 = first sample,
        1 = last sample). Positions outside [0, 1] are clamped. Between two
        samples the instant is linearly interpolated.
        """
        n = len(self.samples)
        index = min(max(fraction * (n - 1), 0.0), n - 1)
        lower = math.floor(index)
        upper = min(n - 1, math.ceil(index))
        t_lower = self.samples[lower].instant
        t_upper = self.samples[upper].instant
        return t_lower + (t_upper - t_lower) * (index - lower)

    def sunlit_period(self, surface: Surface) -> tuple[DateTime, DateTime] | None:
        """Returns the first and the last sampled instant at which `surface`
        receives direct sunlight, or `None` if it receives none that day.
        """
        # an edge-on surface gets rounding residue in the order of 1e-17
        lit = np.flatnonzero(self.intensity(surface) > SUNLIT_THRESHOLD)
        if lit.size == 0:
            return None
        return self.samples[lit[0]].instant, self.samples[lit[-1]].instant
