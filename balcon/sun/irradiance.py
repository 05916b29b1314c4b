"""
Clear-sky irradiance on the faces of a structure.

The intensity of direct sunlight on a surface is the product of a geometric
factor (cosine of the incidence angle, zero when the sun is behind the surface)
and an atmospheric transmittance that decays with air mass. The result is
normalized to [0, 1]; it is not an irradiance in W/m².

References
----------
Kasten, F. & Young, A. T. (1989). Revised optical air mass tables and
approximation formula. Applied Optics, 28(22), 4735-4738.
"""
from dataclasses import dataclass
import numpy as np
from .position import SunPosition
from .surface import SurfaceOrientation


@dataclass(frozen=True)
class ClearSkyAtmosphere:
    """
    Parameters of the clear-sky transmittance law
    `tau = tau_0 * exp(-k * (AM - 1))`.

    Attributes
    ----------
    tau_0:
        Transmittance with the sun at the zenith (air mass 1).
    k:
        Decay rate per unit of air mass.

    Notes
    -----
    Both values are an empirical fit, not physical constants, and can be tuned.
    """
    tau_0: float = 0.8
    k: float = 0.08


DEFAULT_ATMOSPHERE = ClearSkyAtmosphere()


def _out(a: np.ndarray) -> float | np.ndarray:
    # scalar in, Python float out
    return float(a) if a.ndim == 0 else a


def sun_direction(
    azimuth: float | np.ndarray,
    altitude: float | np.ndarray
) -> np.ndarray:
    """Returns the unit vector pointing to the sun in the East-North-Up frame.
    With array input, the vector components are along the last axis.
    """
    azimuth = np.asarray(azimuth, dtype=float)
    altitude = np.asarray(altitude, dtype=float)
    return np.stack([
        np.sin(azimuth) * np.cos(altitude),
        np.cos(azimuth) * np.cos(altitude),
        np.sin(altitude) * np.ones_like(azimuth)
    ], axis=-1)


def surface_normal(
    azimuth: float | np.ndarray,
    tilt: float | np.ndarray
) -> np.ndarray:
    """Returns the outward unit normal of a surface in the East-North-Up frame.

    Parameters
    ----------
    azimuth: radians
        direction the surface faces, measured from North toward East
    tilt: radians
        angle of the normal with the horizontal plane; 0 for a vertical wall,
        pi/2 for a horizontal roof
    """
    return sun_direction(azimuth, tilt)


def geometric_factor(
    position: SunPosition,
    orientation: SurfaceOrientation
) -> float:
    """Returns the cosine of the angle of incidence of the sun rays on the
    surface, or zero when the sun is behind the surface.
    """
    return _geometric_factor(
        position.azimuth, position.altitude,
        orientation.azimuth, orientation.tilt
    )


def _geometric_factor(
    azimuth: float | np.ndarray,
    altitude: float | np.ndarray,
    surface_azimuth: float | np.ndarray,
    tilt: float | np.ndarray
) -> float | np.ndarray:
    d = sun_direction(azimuth, altitude)
    n = surface_normal(surface_azimuth, tilt)
    # np.clip (unlike max) propagates NaN
    return _out(np.clip(np.sum(d * n, axis=-1), 0.0, 1.0))


def air_mass(altitude: float | np.ndarray) -> float | np.ndarray:
    """Returns the relative optical air mass at solar altitude angle `altitude`
    in radians, according to the approximation formula of Kasten & Young.

    The air mass is infinite when the sun is at or below the horizon.
    """
    alpha = np.asarray(altitude, dtype=float)
    above = alpha > 0.0
    # keep the power term away from non-positive altitudes
    alpha_safe = np.where(above, alpha, np.pi / 2)
    am = 1.0 / (
        np.sin(alpha_safe)
        + 0.50572 * (np.degrees(alpha_safe) + 6.07995) ** -1.6364
    )
    am = np.where(above, am, np.inf)
    am = np.where(np.isnan(alpha), np.nan, am)
    return _out(am)


def transmittance(
    am: float | np.ndarray,
    atmosphere: ClearSkyAtmosphere = DEFAULT_ATMOSPHERE
) -> float | np.ndarray:
    """Returns the clear-sky transmittance for direct sunlight that travels
    through air mass `am`. Zero for an infinite air mass.
    """
    am = np.asarray(am, dtype=float)
    finite = np.isfinite(am)
    am_safe = np.where(finite, am, 1.0)
    tau = np.clip(atmosphere.tau_0 * np.exp(-atmosphere.k * (am_safe - 1.0)), 0.0, 1.0)
    tau = np.where(np.isinf(am), 0.0, tau)
    tau = np.where(np.isnan(am), np.nan, tau)
    return _out(tau)


def intensity(
    position: SunPosition,
    orientation: SurfaceOrientation,
    atmosphere: ClearSkyAtmosphere = DEFAULT_ATMOSPHERE
) -> float:
    """Returns the normalized intensity of direct sunlight, between 0 and 1,
    on a surface with the given orientation when the sun is at `position`.
    """
    return intensity_array(
        position.azimuth, position.altitude,
        orientation.azimuth, orientation.tilt,
        atmosphere
    )


def intensity_array(
    azimuth: float | np.ndarray,
    altitude: float | np.ndarray,
    surface_azimuth: float | np.ndarray,
    tilt: float | np.ndarray,
    atmosphere: ClearSkyAtmosphere = DEFAULT_ATMOSPHERE
) -> float | np.ndarray:
    """Vectorized version of `intensity`. All angles in radians; arrays must
    be broadcastable against each other.
    """
    g = _geometric_factor(azimuth, altitude, surface_azimuth, tilt)
    tau = transmittance(air_mass(altitude), atmosphere)
    return _out(np.asarray(g * tau, dtype=float))
