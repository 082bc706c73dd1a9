"""
Physical constants and configuration parameters for sun-angle calculations.

This module provides:
1. Valid ranges for observer and solar coordinates
2. Kasten & Young (1989) airmass coefficients
3. Atmospheric refraction constants
4. Standard atmosphere defaults
"""

from typing import Dict, Tuple

# Angular limits (degrees)
LATITUDE_MAX = 90.0
LONGITUDE_MAX = 180.0
DECLINATION_MAX = 23.6  # Bounds the physical solar declination (~23.44°)
FULL_CIRCLE = 360.0

# Range limits for each geometric input, as (lower, upper) inclusive bounds
VALID_RANGE: Dict[str, Tuple[float, float]] = {
    "latitude": (-LATITUDE_MAX, LATITUDE_MAX),
    "longitude": (-LONGITUDE_MAX, LONGITUDE_MAX),
    "declination": (-DECLINATION_MAX, DECLINATION_MAX),
    "sub_solar_longitude": (-LONGITUDE_MAX, LONGITUDE_MAX),
}


# Kasten-Young (1989) revised optical airmass coefficients
class KastenYoung:
    """Coefficients of m = 1 / (sin(h) + a (h + b)^-c), h in degrees"""

    A = 0.50572
    B = 6.07995  # degrees
    C = 1.6364


# Bennett/Saemundsson refraction constants (as used by NREL SPA)
class Refraction:
    """Constants for the near-horizon refraction correction"""

    SUN_RADIUS = 0.26667  # Apparent solar semi-diameter (degrees)
    HORIZON_REFRACTION = 0.5667  # Standard refraction at the horizon (degrees)
    REFERENCE_PRESSURE = 1010.0  # hPa
    REFERENCE_TEMPERATURE = 283.0  # K
    SCALE = 1.02 / 60.0  # arcminutes -> degrees, with the Saemundsson factor
    OFFSET_NUMERATOR = 10.3  # degrees^2
    OFFSET_DENOMINATOR = 5.11  # degrees


# Standard atmosphere at sea level
P_STANDARD_HPA = 1013.25  # Standard atmospheric pressure (hPa)
T_STANDARD_K = 288.15  # Standard temperature, 15°C (K)
T_ZERO_C = 273.15  # 0°C in Kelvin
