"""
Great-circle geometry between an observer and the sub-solar point.

The sun is treated as a point on the sphere at (declination,
sub-solar longitude), the place where it is directly overhead.  The
cosine of the solar zenith angle at the observer is then the cosine of
the great-circle separation between the two points, and the solar
azimuth is the initial bearing from observer to sub-solar point.

All angles are in degrees.  Functions operate elementwise on numpy
arrays and broadcast under numpy rules; strict shape checking is done
upstream in :mod:`sunang.validation`.

References:
    Snyder, J. P. (1987). Map Projections: A Working Manual. USGS Professional Paper 1395.
"""

from typing import Tuple, Union

import numpy as np

from .constants import FULL_CIRCLE

ArrayOrFloat = Union[float, np.ndarray]


def sind(x: ArrayOrFloat) -> ArrayOrFloat:
    """Sine of an angle in degrees"""
    return np.sin(np.radians(x))


def cosd(x: ArrayOrFloat) -> ArrayOrFloat:
    """Cosine of an angle in degrees"""
    return np.cos(np.radians(x))


def wrap_azimuth(angle: ArrayOrFloat, lower: float = -180.0) -> ArrayOrFloat:
    """
    Wrap angles into the half-open interval ``[lower, lower + 360)``.

    Parameters
    ----------
    angle : float or ndarray
        Angle(s) in degrees.  NaN is passed through.
    lower : float, default ``-180.0``
        Lower bound of the target interval.  Use ``0.0`` for compass
        style ``[0, 360)``.

    Returns
    -------
    float or ndarray
        Wrapped angle(s).

    Examples
    --------
    >>> float(wrap_azimuth(190.0))
    -170.0
    >>> float(wrap_azimuth(-90.0, lower=0.0))
    270.0
    """
    wrapped = np.mod(np.asarray(angle, dtype=float) - lower, FULL_CIRCLE) + lower
    # np.mod of a tiny negative number can round up to exactly 360
    return np.where(wrapped >= lower + FULL_CIRCLE, lower, wrapped)


def separation_cosine(
    lat1: ArrayOrFloat,
    lon1: ArrayOrFloat,
    lat2: ArrayOrFloat,
    lon2: ArrayOrFloat,
) -> ArrayOrFloat:
    """
    Cosine of the great-circle separation between two points.

    .. math::
        \\cos\\sigma = \\sin\\phi_1 \\sin\\phi_2
                     + \\cos\\phi_1 \\cos\\phi_2 \\cos(\\lambda_2 - \\lambda_1)

    The result is clipped into ``[-1, 1]``; rounding can otherwise push
    it a few ulps past the range of a cosine when the points coincide or
    are antipodal.
    """
    dlon = np.asarray(lon2, dtype=float) - lon1
    cos_sep = sind(lat1) * sind(lat2) + cosd(lat1) * cosd(lat2) * cosd(dlon)
    return np.clip(cos_sep, -1.0, 1.0)


def great_circle_distance(
    lat1: ArrayOrFloat,
    lon1: ArrayOrFloat,
    lat2: ArrayOrFloat,
    lon2: ArrayOrFloat,
) -> ArrayOrFloat:
    """
    Angular great-circle distance (degrees of arc) between two points.

    Parameters
    ----------
    lat1, lon1 : float or ndarray
        First point (degrees).
    lat2, lon2 : float or ndarray
        Second point (degrees).

    Returns
    -------
    float or ndarray
        Arc length in ``[0, 180]`` degrees.

    Examples
    --------
    >>> round(float(great_circle_distance(0.0, 0.0, 0.0, 90.0)), 6)
    90.0
    """
    return np.degrees(np.arccos(separation_cosine(lat1, lon1, lat2, lon2)))


def initial_bearing(
    lat1: ArrayOrFloat,
    lon1: ArrayOrFloat,
    lat2: ArrayOrFloat,
    lon2: ArrayOrFloat,
) -> ArrayOrFloat:
    """
    Forward azimuth from point 1 towards point 2 along the great circle.

    Measured clockwise from geographic north at point 1 and wrapped into
    ``[0, 360)``.

    .. math::
        \\beta = \\operatorname{atan2}\\big(\\sin\\Delta\\lambda \\cos\\phi_2,\\;
                 \\cos\\phi_1 \\sin\\phi_2 - \\sin\\phi_1 \\cos\\phi_2 \\cos\\Delta\\lambda\\big)

    When the two points coincide both atan2 arguments are zero and the
    bearing is ``atan2(0, 0) = 0`` (north).
    """
    dlon = np.asarray(lon2, dtype=float) - lon1
    y = sind(dlon) * cosd(lat2)
    x = cosd(lat1) * sind(lat2) - sind(lat1) * cosd(lat2) * cosd(dlon)
    return wrap_azimuth(np.degrees(np.arctan2(y, x)), lower=0.0)


def sun_position(
    latitude: ArrayOrFloat,
    longitude: ArrayOrFloat,
    declination: ArrayOrFloat,
    sub_solar_longitude: ArrayOrFloat,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Cosine of the solar zenith angle and solar azimuth at the observer.

    Parameters
    ----------
    latitude, longitude : float or ndarray
        Observer location (degrees).
    declination : float or ndarray
        Solar declination, i.e. latitude of the sub-solar point (degrees).
    sub_solar_longitude : float or ndarray
        Longitude at which the sun is vertical (degrees).

    Returns
    -------
    (mu0, phi0) : tuple of ndarray
        * **mu0** – cosine of the solar zenith angle; negative when the
          sun is below the horizon.
        * **phi0** – solar azimuth in degrees from south, positive
          counter-clockwise, in ``(-180, 180]``.

    Notes
    -----
    The azimuth is ``180 - bearing`` where *bearing* is the compass
    bearing from the observer to the sub-solar point.  With the sun
    exactly overhead the bearing is 0 by the ``atan2(0, 0)`` convention,
    so ``phi0 = 180``.

    No masking is applied: below-horizon geometry is returned as is.

    Examples
    --------
    >>> mu0, phi0 = sun_position(0.0, 0.0, 0.0, 0.0)
    >>> float(mu0), float(phi0)
    (1.0, 180.0)
    """
    mu0 = separation_cosine(latitude, longitude, declination, sub_solar_longitude)
    bearing = initial_bearing(latitude, longitude, declination, sub_solar_longitude)
    # translate so that 0 is south, positive counter-clockwise
    phi0 = 180.0 - bearing
    return np.asarray(mu0), np.asarray(phi0)


def solar_zenith_angle(mu0: ArrayOrFloat) -> ArrayOrFloat:
    """Solar zenith angle (degrees) from its cosine."""
    return np.degrees(np.arccos(np.clip(mu0, -1.0, 1.0)))


def solar_elevation(mu0: ArrayOrFloat) -> ArrayOrFloat:
    """Solar elevation above the horizon (degrees) from the zenith cosine."""
    return np.degrees(np.arcsin(np.clip(mu0, -1.0, 1.0)))
