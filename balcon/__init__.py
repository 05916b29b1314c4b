from .pint_setup import UNITS, Quantity, magnitude_in
