"""
EXAMPLE 1
---------
Intensity of direct sunlight on the walls and the roof of a balcony in Madrid
on the summer solstice. The southern wall of the balcony is turned 15° toward
West.

Prints the period during which each face receives direct sunlight and shows
the intensity chart of the day.
"""
from datetime import date
from balcon.sun import DailyProfile, AstralSunProvider, Surface, plot_intensity_chart

profile = DailyProfile.compute(
    date=date(2024, 6, 21),
    lat=40.4168,
    lon=-3.7038,
    azm=15.0,
    interval_minutes=15,
    provider=AstralSunProvider(tz='Europe/Madrid')
)

for surface in Surface:
    period = profile.sunlit_period(surface)
    if period is None:
        print(f"{surface.label}: no direct sunlight")
    else:
        print(
            f"{surface.label}: from {period[0]:%H:%M} to {period[1]:%H:%M}, "
            f"peak {profile.intensity_quantity(surface).max():~P.3f}"
        )

chart = plot_intensity_chart(profile)
chart.show(with_grid=False)
