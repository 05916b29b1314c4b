"""
Geometry behind the rendering of a daily profile: the ticks of the shared time
axis of the intensity chart, the sun rays and the footprint of the structure on
a map, and matplotlib renditions of both.
"""
from dataclasses import dataclass
from datetime import datetime as DateTime
from datetime import date as Date
from datetime import time as Time
from datetime import timedelta as TimeDelta
import math
from balcon.charts import LineChart, BandChart
from .position import SunPositionProvider, AstralSunProvider, DayWindow
from .sampling import localize, minute_of_day
from .surface import Surface
from .profile import DailyProfile


METERS_PER_DEGREE = 111320.0  # length of one degree of latitude
MINUTES_PER_DAY = 24 * 60

LatLon = tuple[float, float]


@dataclass(frozen=True)
class AxisTick:
    minute: float
    kind: str  # 'minor', 'hour', 'sunrise' or 'sunset'
    label: str | None = None


def axis_ticks(day_window: DayWindow | None, minor_step: int = 15) -> list[AxisTick]:
    """Returns the ticks of the time axis of the intensity chart.

    There is a tick every `minor_step` minutes from 00:00 to 24:00, with hour
    ticks labelled every 6 hours (the closing midnight is not labelled). Sunrise
    and sunset get their own labelled tick, which replaces any regular tick
    less than one minute away.
    """
    special = []
    if day_window is not None:
        for kind, t in (('sunrise', day_window.sunrise), ('sunset', day_window.sunset)):
            if t is not None:
                special.append(AxisTick(t.hour * 60 + t.minute, kind, t.strftime('%H:%M')))
    ticks = []
    for minute in range(0, MINUTES_PER_DAY + 1, minor_step):
        if any(abs(s.minute - minute) < 1 for s in special):
            continue
        if minute % 60 == 0:
            label = None
            if minute % 360 == 0 and minute < MINUTES_PER_DAY:
                label = f'{minute // 60:02d}:00'
            ticks.append(AxisTick(minute, 'hour', label))
        else:
            ticks.append(AxisTick(minute, 'minor'))
    return sorted(ticks + special, key=lambda tick: tick.minute)


@dataclass(frozen=True)
class SunRay:
    """A line on the map from the location in the direction the sun's light
    travels. Its length shrinks as the sun climbs.
    """
    start: LatLon
    end: LatLon
    instant: DateTime
    azimuth: float
    altitude: float
    is_sunrise: bool = False
    is_sunset: bool = False


def ray_end(lat: float, lon: float, azimuth: float, length: float) -> LatLon:
    """Returns the end point of a ray of `length` metres that starts at
    (`lat`, `lon`) and points away from the sun at `azimuth` (radians).
    """
    lat_offset = length / METERS_PER_DEGREE
    lon_offset = length / (METERS_PER_DEGREE * math.cos(math.radians(lat)))
    return (
        lat - math.cos(azimuth) * lat_offset,
        lon - math.sin(azimuth) * lon_offset
    )


def _ray(
    instant: DateTime,
    lat: float,
    lon: float,
    provider: SunPositionProvider,
    base_length: float,
    is_sunrise: bool = False,
    is_sunset: bool = False
) -> SunRay:
    pos = provider.get_position(instant, lat, lon)
    length = base_length * math.cos(pos.altitude)
    return SunRay(
        start=(lat, lon),
        end=ray_end(lat, lon, pos.azimuth, length),
        instant=instant,
        azimuth=pos.azimuth,
        altitude=pos.altitude,
        is_sunrise=is_sunrise,
        is_sunset=is_sunset
    )


def sun_rays(
    date: Date,
    lat: float,
    lon: float,
    provider: SunPositionProvider | None = None,
    step_minutes: int = 30,
    ray_length: float = 150.0,
    special_ray_length: float = 180.0
) -> list[SunRay]:
    """
    Returns the sun rays to draw on the map for the given day.

    Between sunrise (rounded down to a multiple of `step_minutes`) and sunset
    (rounded up) a ray is added every `step_minutes` minutes while the sun is
    above the horizon. Two longer rays mark sunrise and sunset themselves.
    On a polar day rays cover the whole day; on a polar night there are none.
    """
    provider = provider or AstralSunProvider()
    if isinstance(date, DateTime):
        date = date.date()
    day_window = provider.get_times(date, lat, lon)
    if day_window.is_defined:
        sr = day_window.sunrise.replace(tzinfo=None)
        ss = day_window.sunset.replace(tzinfo=None)
        start = DateTime.combine(
            sr.date(),
            Time(sr.hour, (sr.minute // step_minutes) * step_minutes)
        )
        end = DateTime.combine(ss.date(), Time(ss.hour)) + TimeDelta(
            minutes=math.ceil(ss.minute / step_minutes) * step_minutes
        )
    elif day_window.always_up:
        start = DateTime.combine(date, Time(0, 0))
        end = start + TimeDelta(days=1) - TimeDelta(minutes=step_minutes)
    else:
        return []
    naive_instants = []
    t = start
    while t <= end:
        naive_instants.append(t)
        t += TimeDelta(minutes=step_minutes)
    tzinfo = getattr(provider, 'tzinfo', None)
    instants = localize(naive_instants, tzinfo) if tzinfo is not None else naive_instants
    rays = [
        ray for ray in (
            _ray(t, lat, lon, provider, ray_length) for t in instants
        )
        if ray.altitude > 0.0
    ]
    if day_window.is_defined:
        rays.append(_ray(
            day_window.sunrise, lat, lon, provider, special_ray_length,
            is_sunrise=True
        ))
        rays.append(_ray(
            day_window.sunset, lat, lon, provider, special_ray_length,
            is_sunset=True
        ))
    return rays


def footprint(
    lat: float,
    lon: float,
    azm: float = 0.0,
    size: float = 10.0
) -> dict[Surface, tuple[LatLon, LatLon]]:
    """Returns the end points of each wall of a square structure of `size`
    metres centred at (`lat`, `lon`) and rotated by `azm` degrees.
    """
    orientation = math.radians(-azm)
    lat_offset = size / METERS_PER_DEGREE
    lon_offset = size / (METERS_PER_DEGREE * math.cos(math.radians(lat)))
    corners = []
    for dx, dy in ((0.5, 0.5), (-0.5, 0.5), (-0.5, -0.5), (0.5, -0.5)):
        dx_rot = dx * math.cos(orientation) - dy * math.sin(orientation)
        dy_rot = dx * math.sin(orientation) + dy * math.cos(orientation)
        corners.append((lat + dy_rot * lat_offset, lon + dx_rot * lon_offset))
    return {
        Surface.EAST: (corners[0], corners[3]),
        Surface.SOUTH: (corners[3], corners[2]),
        Surface.WEST: (corners[2], corners[1]),
        Surface.NORTH: (corners[1], corners[0]),
    }


def plot_intensity_chart(profile: DailyProfile, **kwargs) -> BandChart:
    """
    Draw the intensity of direct sunlight on each face of the structure as a
    band of colored segments, one band per face, on a shared time axis.

    Parameters
    ----------
    profile: DailyProfile
        The daily profile to draw.
    **kwargs: dict
        Optional keyword arguments for setting the size (keyword `fig_size`)
        and dpi (keyword `dpi`) of the diagram.
    """
    chart = BandChart(
        size=kwargs.get('fig_size', (10, 4)),
        dpi=kwargs.get('dpi', 96)
    )
    minutes = [minute_of_day(t) for t in profile.instants]
    width = MINUTES_PER_DAY / max(len(minutes), 1)
    for row, surface in enumerate(Surface):
        chart.add_xy_data(
            label=surface.label,
            x1_values=minutes,
            y1_values=profile.opacity(surface),
            style_props={'row': row, 'width': width, 'color': surface.color}
        )
    ticks = [tick for tick in axis_ticks(profile.day_window) if tick.label is not None]
    chart.x1.set_ticks([tick.minute for tick in ticks], [tick.label for tick in ticks])
    chart.x1.set_limits(0, MINUTES_PER_DAY)
    chart.x1.add_title('time of day')
    for tick in ticks:
        if tick.kind in ('sunrise', 'sunset'):
            chart.add_vline(
                tick.minute,
                color='#ff9800' if tick.kind == 'sunrise' else '#f57c00',
                linewidth=2
            )
    chart.add_title('Sunlight intensity by surface')
    return chart


def plot_overlay(
    rays: list[SunRay],
    sides: dict[Surface, tuple[LatLon, LatLon]],
    lat: float,
    lon: float,
    **kwargs
) -> LineChart:
    """
    Draw the sun rays and the walls of the structure around the location,
    with longitude along the horizontal axis and latitude along the vertical
    axis.
    """
    graph = LineChart(
        size=kwargs.get('fig_size', (8, 8)),
        dpi=kwargs.get('dpi', 96)
    )
    for ray in rays:
        special = ray.is_sunrise or ray.is_sunset
        if ray.is_sunrise:
            color, suffix = '#FF6B35', ' sunrise'
        elif ray.is_sunset:
            color, suffix = '#FF8C42', ' sunset'
        else:
            color, suffix = '#FFD700', ''
        graph.add_xy_data(
            label=ray.instant.strftime('%H:%M') + suffix,
            x1_values=[ray.start[1], ray.end[1]],
            y1_values=[ray.start[0], ray.end[0]],
            style_props={
                'color': color,
                'linewidth': 4 if special else 2,
                'alpha': 0.9 if special else 0.7,
                'linestyle': '--'
            }
        )
    for surface, (p1, p2) in sides.items():
        graph.add_xy_data(
            label=surface.label.lower(),
            x1_values=[p1[1], p2[1]],
            y1_values=[p1[0], p2[0]],
            style_props={'color': surface.color, 'linewidth': 6, 'alpha': 0.8}
        )
    graph.add_xy_data(
        label='location',
        x1_values=[lon],
        y1_values=[lat],
        style_props={'marker': 'o', 'color': 'black', 'linestyle': 'none'}
    )
    graph.x1.add_title('longitude, deg')
    graph.y1.add_title('latitude, deg')
    graph.axes.set_aspect(1.0 / math.cos(math.radians(lat)))
    return graph
