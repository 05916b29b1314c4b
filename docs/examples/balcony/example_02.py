"""
EXAMPLE 2
---------
Sun rays and the footprint of a balcony in Sevilla on the winter solstice,
drawn on a latitude/longitude chart. The longest rays mark sunrise and sunset.
"""
from datetime import date
import math
from balcon.sun import AstralSunProvider, sun_rays, footprint, plot_overlay

lat, lon, azm = 37.3891, -5.9845, -10.0

rays = sun_rays(
    date=date(2024, 12, 21),
    lat=lat,
    lon=lon,
    provider=AstralSunProvider(tz='Europe/Madrid')
)
for ray in rays:
    print(f"{ray.instant:%H:%M} | altitude {math.degrees(ray.altitude):.1f}°")

chart = plot_overlay(rays, footprint(lat, lon, azm), lat, lon)
chart.add_legend(columns=4)
chart.show()
