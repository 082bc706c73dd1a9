"""
sunang - solar zenith cosine, azimuth and airmass on a horizontal surface.
"""

import logging

from . import airmass
from . import constants
from . import geometry
from . import refraction
from . import validation
from .airmass import kasten_young
from .main import SunAngleProcessor, SunAngles, compute_sun_angles
from .refraction import AtmosphericState, refracted
from .validation import ValidationError, broadcast_pair

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "compute_sun_angles",
    "SunAngles",
    "SunAngleProcessor",
    "AtmosphericState",
    "ValidationError",
    "broadcast_pair",
    "kasten_young",
    "refracted",
    "__version__",
]
