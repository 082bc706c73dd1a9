"""
Atmospheric refraction correction of the solar zenith cosine.

Refraction bends sunlight downward through the atmosphere so the sun
appears higher than its geometric position, by roughly half a degree at
the horizon and almost nothing near the zenith.  The correction here
is the Bennett (1982) formula in Saemundsson's form, scaled for pressure
and temperature, as used by the NREL Solar Position Algorithm.

References:
    Bennett, G. G. (1982). The calculation of astronomical refraction in marine navigation. Journal of Navigation, 35(2), 255-259.
    Reda, I., & Andreas, A. (2004). Solar position algorithm for solar radiation applications. Solar Energy, 76(5), 577-589.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from .constants import P_STANDARD_HPA, T_STANDARD_K, Refraction
from .validation import ValidationError, as_numeric_array, check_positive

logger = logging.getLogger(__name__)

ArrayOrFloat = Union[float, np.ndarray]


@dataclass(frozen=True)
class AtmosphericState:
    """
    Surface pressure and temperature used for the refraction correction.

    The two values always travel together, so a state with one of them
    missing cannot be constructed.

    Parameters
    ----------
    pressure : float or ndarray
        Surface pressure (hPa, same as mb).  Must be positive.
    temperature : float or ndarray
        Surface air temperature (K).  Must be positive.

    Examples
    --------
    >>> AtmosphericState(pressure=1000.0, temperature=288.0)
    AtmosphericState(pressure=array(1000.), temperature=array(288.))
    """

    pressure: ArrayOrFloat
    temperature: ArrayOrFloat

    def __post_init__(self):
        """Validate parameters"""
        pressure = as_numeric_array(self.pressure, "pressure")
        temperature = as_numeric_array(self.temperature, "temperature")
        check_positive(pressure, "pressure")
        check_positive(temperature, "temperature")
        object.__setattr__(self, "pressure", pressure)
        object.__setattr__(self, "temperature", temperature)

    @classmethod
    def standard(cls) -> "AtmosphericState":
        """Sea-level standard atmosphere, 1013.25 hPa and 288.15 K."""
        return cls(pressure=P_STANDARD_HPA, temperature=T_STANDARD_K)

    @classmethod
    def from_optional(
        cls,
        pressure: Optional[ArrayOrFloat] = None,
        temperature: Optional[ArrayOrFloat] = None,
    ) -> Optional["AtmosphericState"]:
        """
        Build a state from two independently optional values.

        Returns ``None`` when neither is given.

        Raises
        ------
        ValidationError
            If exactly one of *pressure* and *temperature* is given.
        """
        if pressure is None and temperature is None:
            return None
        if pressure is None or temperature is None:
            raise ValidationError(
                "if you specify pressure or temperature, you must specify both",
                parameter="pressure" if pressure is None else "temperature",
            )
        return cls(pressure=pressure, temperature=temperature)


def refraction_correction(
    elevation: ArrayOrFloat,
    pressure: ArrayOrFloat = P_STANDARD_HPA,
    temperature: ArrayOrFloat = T_STANDARD_K,
) -> np.ndarray:
    """
    Increase in apparent solar elevation due to refraction (degrees).

    .. math::
        \\Delta e = \\frac{P}{1010}\\,\\frac{283}{T}\\,
                    \\frac{1.02}{60 \\tan\\left(e_0 + \\frac{10.3}{e_0 + 5.11}\\right)}

    Parameters
    ----------
    elevation : float or ndarray
        True (geometric) solar elevation :math:`e_0` (degrees).
    pressure : float or ndarray, default ``1013.25``
        Surface pressure (hPa).
    temperature : float or ndarray, default ``288.15``
        Surface temperature (K).

    Returns
    -------
    ndarray
        Correction :math:`\\Delta e` (degrees), zero once the whole solar
        disc is below the refracted horizon, and never negative.
    """
    e0 = np.asarray(elevation, dtype=float)
    # switch sets delta_e to zero when the sun is below the horizon
    switch = e0 >= -(Refraction.SUN_RADIUS + Refraction.HORIZON_REFRACTION)

    with np.errstate(divide="ignore", invalid="ignore"):
        angle = np.radians(
            e0 + Refraction.OFFSET_NUMERATOR / (e0 + Refraction.OFFSET_DENOMINATOR)
        )
        delta_e = (
            (pressure / Refraction.REFERENCE_PRESSURE)
            * (Refraction.REFERENCE_TEMPERATURE / temperature)
            * Refraction.SCALE
            / np.tan(angle)
        )

    # past the zenith the tangent changes sign; refraction never lowers the sun
    return np.where(switch, np.clip(delta_e, 0.0, None), 0.0)


def refracted(
    mu0: ArrayOrFloat,
    pressure: ArrayOrFloat,
    temperature: ArrayOrFloat,
) -> np.ndarray:
    """
    Apparent (refracted) cosine of the solar zenith angle.

    Parameters
    ----------
    mu0 : float or ndarray
        True cosine of the solar zenith angle, in ``[-1, 1]``.
    pressure : float or ndarray
        Surface pressure (hPa).
    temperature : float or ndarray
        Surface temperature (K).

    Returns
    -------
    ndarray
        Apparent cosine with the shape of *mu0*.  The apparent elevation
        is capped at 90°, so the result never exceeds 1.

    Examples
    --------
    >>> round(float(refracted(0.0, 1013.25, 288.15)), 4)
    0.0083
    """
    mu0 = np.asarray(mu0, dtype=float)
    e0 = np.degrees(np.arcsin(np.clip(mu0, -1.0, 1.0)))
    apparent = np.minimum(e0 + refraction_correction(e0, pressure, temperature), 90.0)
    logger.debug("refraction applied to %d element(s)", apparent.size)
    return np.sin(np.radians(apparent))
