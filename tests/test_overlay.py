import math
from datetime import datetime as DateTime
from datetime import time as Time

import matplotlib.pyplot as plt
import pytest

from balcon.sun import (
    DailyProfile,
    DayWindow,
    Surface,
    axis_ticks,
    sun_rays,
    footprint,
    plot_intensity_chart,
    plot_overlay,
)
from balcon.sun.overlay import METERS_PER_DEGREE, ray_end
from conftest import FakeSunProvider


class TestAxisTicks:
    def test_without_day_window(self) -> None:
        ticks = axis_ticks(None)
        assert len(ticks) == 97
        assert [t.label for t in ticks if t.label] == ['00:00', '06:00', '12:00', '18:00']
        assert sum(t.kind == 'hour' for t in ticks) == 25

    def test_sunrise_and_sunset(self, day) -> None:
        window = DayWindow(
            sunrise=DateTime.combine(day, Time(7, 13, 40)),
            sunset=DateTime.combine(day, Time(20, 41, 5))
        )
        ticks = axis_ticks(window)
        special = [t for t in ticks if t.kind in ('sunrise', 'sunset')]
        assert [(t.minute, t.label) for t in special] == [(433, '07:13'), (1241, '20:41')]
        assert len(ticks) == 99

    def test_special_tick_replaces_regular_tick(self, day) -> None:
        window = DayWindow(
            sunrise=DateTime.combine(day, Time(6, 0)),
            sunset=DateTime.combine(day, Time(18, 0))
        )
        ticks = axis_ticks(window)
        assert len(ticks) == 97
        at_six = [t for t in ticks if t.minute == 360]
        assert len(at_six) == 1 and at_six[0].kind == 'sunrise'

    def test_sorted(self, day) -> None:
        window = DayWindow(
            sunrise=DateTime.combine(day, Time(5, 2)),
            sunset=DateTime.combine(day, Time(21, 58))
        )
        minutes = [t.minute for t in axis_ticks(window)]
        assert minutes == sorted(minutes)


class TestSunRays:
    def test_count_and_flags(self, day, provider) -> None:
        rays = sun_rays(day, 40.0, -3.7, provider)
        regular = [r for r in rays if not (r.is_sunrise or r.is_sunset)]
        assert len(regular) == 23
        assert sum(r.is_sunrise for r in rays) == 1
        assert sum(r.is_sunset for r in rays) == 1
        assert all(r.altitude > 0 for r in regular)

    def test_rays_every_half_hour(self, day, provider) -> None:
        rays = [r for r in sun_rays(day, 40.0, -3.7, provider) if not r.is_sunrise and not r.is_sunset]
        assert rays[0].instant.time() == Time(6, 30)
        assert rays[-1].instant.time() == Time(17, 30)

    def test_noon_ray_points_away_from_sun(self, day, provider) -> None:
        lat, lon = 40.0, -3.7
        noon = [r for r in sun_rays(day, lat, lon, provider) if r.instant.time() == Time(12, 0)][0]
        # sun due South at 60°: ray of 75 m pointing North
        assert noon.start == (lat, lon)
        assert noon.end[0] == pytest.approx(lat + 75.0 / METERS_PER_DEGREE)
        assert noon.end[1] == pytest.approx(lon, abs=1e-12)

    def test_special_ray_length(self, day, provider) -> None:
        sunrise = [r for r in sun_rays(day, 0.0, 0.0, provider) if r.is_sunrise][0]
        # sun due East on the horizon: 180 m pointing West
        assert sunrise.end[1] == pytest.approx(-180.0 / METERS_PER_DEGREE)

    def test_polar_day(self, day) -> None:
        provider = FakeSunProvider(window=DayWindow(None, None, always_up=True))
        rays = sun_rays(day, 80.0, 0.0, provider)
        assert len(rays) == 23
        assert not any(r.is_sunrise or r.is_sunset for r in rays)
        assert all(r.instant.date() == day for r in rays)

    def test_polar_day_stops_before_next_midnight(self, day) -> None:
        provider = FakeSunProvider(max_altitude=0.5, window=DayWindow(None, None, always_up=True))
        sun_rays(day, 80.0, 0.0, provider)
        # 00:00 to 23:30 every 30 minutes
        assert provider.position_calls == 48

    def test_polar_night(self, day) -> None:
        provider = FakeSunProvider(window=DayWindow(None, None, always_down=True))
        assert sun_rays(day, -80.0, 0.0, provider) == []

    def test_ray_end_longitude_scaled(self) -> None:
        end = ray_end(60.0, 0.0, math.pi / 2, 100.0)
        assert end[1] == pytest.approx(-100.0 / (METERS_PER_DEGREE * 0.5))


class TestFootprint:
    def test_walls_without_rotation(self) -> None:
        half = 5.0 / METERS_PER_DEGREE
        sides = footprint(0.0, 0.0, azm=0.0, size=10.0)
        (a, b) = sides[Surface.EAST]
        assert a[1] == pytest.approx(half) and b[1] == pytest.approx(half)
        (a, b) = sides[Surface.SOUTH]
        assert a[0] == pytest.approx(-half) and b[0] == pytest.approx(-half)
        assert Surface.ROOF not in sides

    def test_quarter_turn_moves_east_wall_south(self) -> None:
        half = 5.0 / METERS_PER_DEGREE
        (a, b) = footprint(0.0, 0.0, azm=90.0)[Surface.EAST]
        assert a[0] == pytest.approx(-half) and b[0] == pytest.approx(-half)


class TestPlots:
    def test_intensity_chart(self, day, provider) -> None:
        profile = DailyProfile.compute(day, 40.0, -3.7, 15.0, 15, provider)
        chart = plot_intensity_chart(profile)
        chart.draw()
        labels = [t.get_text() for t in chart.axes.get_yticklabels()]
        assert sorted(labels) == sorted(s.label for s in Surface)
        assert chart.axes.get_title() == 'Sunlight intensity by surface'
        chart.close()

    def test_overlay(self, day, provider) -> None:
        rays = sun_rays(day, 40.0, -3.7, provider)
        chart = plot_overlay(rays, footprint(40.0, -3.7, 15.0), 40.0, -3.7)
        chart.draw()
        # rays + 4 walls + location marker
        assert len(chart.axes.get_lines()) == len(rays) + 5
        plt.close('all')
