import pint

UNITS = pint.UnitRegistry()
Quantity = UNITS.Quantity

# dimensionless intensities and opacities
UNITS.define('fraction = [] = frac')

pint.set_application_registry(UNITS)


def magnitude_in(value: float | Quantity, unit: str) -> float:
    """Returns the magnitude of `value` expressed in `unit`. A plain number is
    assumed to be in `unit` already.
    """
    if isinstance(value, Quantity):
        return float(value.to(unit).m)
    return float(value)
