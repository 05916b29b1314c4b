from .position import SunPosition, DayWindow, SunPositionProvider, AstralSunProvider
from .sampling import SunSample, sample_day, sample_instants, minute_of_day
from .surface import Surface, SurfaceOrientation, structure_orientations
from .irradiance import (
    ClearSkyAtmosphere,
    DEFAULT_ATMOSPHERE,
    sun_direction,
    surface_normal,
    geometric_factor,
    air_mass,
    transmittance,
    intensity,
    intensity_array
)
from .profile import DailyProfile, bar_opacity
from .overlay import (
    AxisTick,
    SunRay,
    axis_ticks,
    sun_rays,
    footprint,
    plot_intensity_chart,
    plot_overlay
)
