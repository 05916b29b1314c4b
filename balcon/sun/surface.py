from dataclasses import dataclass
from enum import Enum
import math
from balcon import Quantity, magnitude_in


@dataclass(frozen=True)
class SurfaceOrientation:
    """
    Orientation of a flat surface.

    Attributes
    ----------
    azimuth:
        Radians from North (toward East) of the direction the outward normal
        of the surface is facing.
    tilt:
        Radians between the outward normal and the horizontal plane; 0 for a
        vertical wall, pi/2 for a horizontal, upward-facing roof.
    """
    azimuth: float
    tilt: float


class Surface(Enum):
    """
    The five sun-exposed faces of a rectangular structure, in the order they
    are shown on the intensity chart.

    The wall azimuths hold for a structure whose southern wall faces true
    South; the structure rotation is added to them.
    """
    EAST = ('East', 90.0, 0.0, '#FFD300')
    SOUTH = ('South', 180.0, 0.0, '#FF0000')
    WEST = ('West', 270.0, 0.0, '#3914AF')
    NORTH = ('North', 0.0, 0.0, '#00CC00')
    ROOF = ('Roof', 0.0, 90.0, '#FFFFFF')

    def __init__(self, label: str, base_azimuth: float, tilt: float, color: str):
        self.label = label
        self.base_azimuth = base_azimuth  # deg
        self.tilt_deg = tilt
        self.color = color

    @property
    def is_roof(self) -> bool:
        return self.tilt_deg == 90.0

    def orientation(self, azm: float | Quantity = 0.0) -> SurfaceOrientation:
        """Returns the orientation of this surface when the structure is
        rotated by `azm` (decimal degrees if a plain number; positive turns
        the walls clockwise seen from above). The roof does not depend on the
        rotation.
        """
        azm = magnitude_in(azm, 'deg')
        if self.is_roof:
            return SurfaceOrientation(azimuth=0.0, tilt=math.pi / 2)
        return SurfaceOrientation(
            azimuth=math.radians((self.base_azimuth + azm) % 360.0),
            tilt=math.radians(self.tilt_deg)
        )


def structure_orientations(azm: float | Quantity = 0.0) -> dict[Surface, SurfaceOrientation]:
    """Returns the orientation of each face of a structure rotated by `azm`,
    in chart order.
    """
    return {surface: surface.orientation(azm) for surface in Surface}
