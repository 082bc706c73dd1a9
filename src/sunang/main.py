"""
Sun angles on a horizontal surface, with optional correction for refraction.

This module implements the full pipeline:

1. validate and broadcast the observer and solar coordinates,
2. compute the zenith cosine and azimuth from great-circle geometry,
3. optionally correct the cosine for atmospheric refraction,
4. derive the relative airmass from the (corrected) cosine,
5. optionally zero below-horizon cosines and invalidate their azimuths.

Solar declination and sub-solar longitude come from an ephemeris and
are supplied by the caller.
"""

import logging
from typing import Any, Callable, Dict, NamedTuple, Optional, Union

import numpy as np
import pandas as pd

from .airmass import kasten_young
from .constants import T_ZERO_C
from .geometry import sun_position
from .refraction import AtmosphericState, refracted
from .validation import (
    ArrayLike,
    ValidationError,
    check_conforms,
    validate_flag,
    validate_geometry,
)

logger = logging.getLogger(__name__)

RefractionFunction = Callable[[np.ndarray, np.ndarray, np.ndarray], np.ndarray]


class SunAngles(NamedTuple):
    """
    Result of :func:`compute_sun_angles`.

    Unpacks as ``mu0, phi0, airmass``.  Each field is a ``float`` when
    every input was a scalar and an ndarray of the common input shape
    otherwise.
    """

    mu0: Union[float, np.ndarray]
    phi0: Union[float, np.ndarray]
    airmass: Union[float, np.ndarray]


def _as_output(arr: np.ndarray, scalar: bool) -> Union[float, np.ndarray]:
    return float(arr) if scalar else np.array(arr, dtype=float)


def compute_sun_angles(
    latitude: ArrayLike,
    longitude: ArrayLike,
    declination: ArrayLike,
    sub_solar_longitude: ArrayLike,
    zero_below_horizon: bool = True,
    pressure: Optional[ArrayLike] = None,
    temperature: Optional[ArrayLike] = None,
    *,
    atmosphere: Optional[AtmosphericState] = None,
    refraction: RefractionFunction = refracted,
) -> SunAngles:
    """
    Cosine of the solar zenith angle, solar azimuth and relative airmass.

    Parameters
    ----------
    latitude : float or array_like
        Observer latitude (degrees), ``|latitude| <= 90``.
    longitude : float or array_like
        Observer longitude (degrees), ``|longitude| <= 180``.
    declination : float or array_like
        Solar declination (degrees), ``|declination| <= 23.6``.
    sub_solar_longitude : float or array_like
        Longitude at which the sun is vertical (degrees),
        ``|sub_solar_longitude| <= 180``.
    zero_below_horizon : bool, default ``True``
        If true, negative cosines are set to zero and their azimuths to
        NaN.  If false, both are returned as computed.
    pressure : float or array_like, optional
        Surface pressure (hPa).  Supply together with *temperature* to
        correct for refraction.
    temperature : float or array_like, optional
        Surface temperature (K).  Supply together with *pressure*.
    atmosphere : AtmosphericState, optional
        Pressure and temperature as a single value; an alternative to
        the two separate keywords, not to be combined with them.
    refraction : callable, default :func:`sunang.refraction.refracted`
        ``refraction(mu0, pressure, temperature) -> mu0_apparent``.
        Used only when an atmosphere is supplied.

    Returns
    -------
    SunAngles
        ``(mu0, phi0, airmass)``:

        * **mu0** – cosine of the solar zenith angle (apparent, when
          refraction is applied).
        * **phi0** – solar azimuth in degrees from south, positive
          counter-clockwise, in ``(-180, 180]``.
        * **airmass** – relative atmospheric path length, 1.0 at the
          zenith; NaN whenever ``mu0 < 0`` regardless of masking.

    Raises
    ------
    ValidationError
        If a coordinate is out of range or non-numeric, if pressure or
        temperature is not positive, if only one of them is given, if
        *atmosphere* is combined with them, or if the input shapes
        cannot be reconciled.
    ValueError
        If *refraction* returns an array of a different shape.

    Notes
    -----
    When the observer is directly beneath the sun the azimuth is
    undefined; the ``atan2(0, 0) = 0`` convention yields ``phi0 = 180``.
    The masking boundary is strict: ``mu0 == 0`` is left untouched.

    Examples
    --------
    Without refraction:

    >>> mu0, phi0, airmass = compute_sun_angles(38.0, -119.0, 23.2, -60.0)

    With refraction:

    >>> mu0, phi0, airmass = compute_sun_angles(
    ...     38.0, -119.0, 23.2, -60.0, True, 1000.0, 288.0)

    Multiple latitudes:

    >>> result = compute_sun_angles(np.arange(30, 51, 5), -119.0, 23.2, -60.0)
    >>> result.mu0.shape
    (5,)
    """
    zero_flag = validate_flag(zero_below_horizon)
    lat, lon, dec, omega = validate_geometry(
        latitude, longitude, declination, sub_solar_longitude
    )

    if atmosphere is not None:
        if pressure is not None or temperature is not None:
            raise ValidationError(
                "specify either atmosphere or pressure/temperature, not both",
                parameter="atmosphere",
            )
    else:
        atmosphere = AtmosphericState.from_optional(pressure, temperature)

    if atmosphere is not None:
        check_conforms(atmosphere.pressure, lat.shape, "pressure")
        check_conforms(atmosphere.temperature, lat.shape, "temperature")

    mu0, phi0 = sun_position(lat, lon, dec, omega)

    # atmospheric refraction
    if atmosphere is not None:
        apparent = np.asarray(
            refraction(mu0, atmosphere.pressure, atmosphere.temperature), dtype=float
        )
        if apparent.shape != mu0.shape:
            raise ValueError(
                f"refraction changed the array shape from {mu0.shape} to {apparent.shape}"
            )
        mu0 = apparent

    # relative airmass
    airmass = kasten_young(mu0)

    # set negative cosines to zero
    below = mu0 < 0
    if zero_flag and np.any(below):
        mu0 = np.where(below, 0.0, mu0)
        phi0 = np.where(below, np.nan, phi0)

    logger.debug(
        "computed sun angles for shape %s (refraction=%s, %d below horizon)",
        lat.shape,
        atmosphere is not None,
        int(np.count_nonzero(below)),
    )

    scalar = lat.ndim == 0
    return SunAngles(
        mu0=_as_output(mu0, scalar),
        phi0=_as_output(phi0, scalar),
        airmass=_as_output(airmass, scalar),
    )


class SunAngleProcessor:
    """Sun-angle calculations for tabular station or pixel data"""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize processor with configuration.

        Args:
            config: Dictionary containing processing options.  Recognised
                keys are ``zero_below_horizon`` (default True),
                ``pressure`` and ``temperature`` (site constants, default
                None), ``temperature_units`` (``'K'`` or ``'C'``), and
                ``columns``, a mapping of the logical names latitude,
                longitude, declination, sub_solar_longitude, pressure and
                temperature to DataFrame column names.
        """
        self.config = config or {}
        self.initialize_parameters()

    def initialize_parameters(self) -> None:
        """Initialize processing parameters from the configuration"""
        self.zero_below_horizon = validate_flag(
            self.config.get("zero_below_horizon", True)
        )
        self.temperature_units = self.config.get("temperature_units", "K")
        if self.temperature_units not in ("K", "C"):
            raise ValidationError(
                f"temperature_units must be 'K' or 'C', got {self.temperature_units!r}",
                parameter="temperature_units",
            )

        self.columns = {
            "latitude": "latitude",
            "longitude": "longitude",
            "declination": "declination",
            "sub_solar_longitude": "sub_solar_longitude",
            "pressure": "pressure",
            "temperature": "temperature",
        }
        self.columns.update(self.config.get("columns", {}))

        self.pressure = self.config.get("pressure")
        self.temperature = self.config.get("temperature")

    def _to_kelvin(self, temperature: Optional[ArrayLike]) -> Optional[ArrayLike]:
        if temperature is None or self.temperature_units == "K":
            return temperature
        return np.asarray(temperature, dtype=float) + T_ZERO_C

    def compute(
        self,
        latitude: ArrayLike,
        longitude: ArrayLike,
        declination: ArrayLike,
        sub_solar_longitude: ArrayLike,
        pressure: Optional[ArrayLike] = None,
        temperature: Optional[ArrayLike] = None,
    ) -> SunAngles:
        """
        Compute sun angles with the configured masking and site atmosphere.

        Explicit *pressure*/*temperature* arguments take precedence over
        the configured site values.

        Returns:
            SunAngles tuple ``(mu0, phi0, airmass)``
        """
        if pressure is None and temperature is None:
            pressure, temperature = self.pressure, self.temperature

        return compute_sun_angles(
            latitude,
            longitude,
            declination,
            sub_solar_longitude,
            zero_below_horizon=self.zero_below_horizon,
            pressure=pressure,
            temperature=self._to_kelvin(temperature),
        )

    def process_frame(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Compute sun angles for every row of a DataFrame.

        Args:
            df: DataFrame holding latitude, longitude, declination and
                sub-solar longitude columns, and optionally pressure and
                temperature columns (which override the site constants).

        Returns:
            DataFrame with ``mu0``, ``phi0`` and ``airmass`` columns on
            the index of *df*.

        Raises:
            ValidationError: If a required column is missing or the data
                fail validation.
        """
        required = ["latitude", "longitude", "declination", "sub_solar_longitude"]
        missing = [self.columns[name] for name in required if self.columns[name] not in df]
        if missing:
            raise ValidationError(f"DataFrame is missing required columns: {missing}")

        values = {name: df[self.columns[name]].to_numpy() for name in required}

        pressure_col = self.columns["pressure"]
        temperature_col = self.columns["temperature"]
        pressure = df[pressure_col].to_numpy() if pressure_col in df else None
        temperature = df[temperature_col].to_numpy() if temperature_col in df else None

        result = self.compute(
            values["latitude"],
            values["longitude"],
            values["declination"],
            values["sub_solar_longitude"],
            pressure=pressure,
            temperature=temperature,
        )

        return pd.DataFrame(
            {"mu0": result.mu0, "phi0": result.phi0, "airmass": result.airmass},
            index=df.index,
        )
