"""
Input validation and strict broadcasting for sun-angle calculations.

Inputs may be scalars or numpy arrays.  Unlike numpy's general
broadcasting rules, only two cases are accepted when combining two
inputs:

1. at most one of them is non-scalar, in which case the scalar is
   expanded to the array's shape, or
2. both are non-scalar with *identical* shapes.

Anything else (``(3,)`` against ``(2, 3)``, ``(5,)`` against ``(4,)``)
is rejected with a :class:`ValidationError`.
"""

import logging
from numbers import Number
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from .constants import VALID_RANGE

logger = logging.getLogger(__name__)

ArrayLike = Union[float, int, Sequence[float], np.ndarray]


class ValidationError(ValueError):
    """
    Raised when an input violates a range, pairing or shape constraint.

    Parameters
    ----------
    message : str
        Human-readable description of the violated constraint.
    parameter : str, optional
        Name of the offending argument, when a single one is to blame.
    """

    def __init__(self, message: str, parameter: Optional[str] = None):
        super().__init__(message)
        self.parameter = parameter


def as_numeric_array(value: ArrayLike, name: str) -> np.ndarray:
    """
    Convert *value* to a float ndarray, rejecting non-numeric input.

    Booleans, complex numbers, strings and object arrays are refused;
    integers are promoted to float.
    """
    if value is None:
        raise ValidationError(f"{name} is required", parameter=name)

    arr = np.asarray(value)
    if arr.dtype.kind not in "iuf":
        raise ValidationError(
            f"{name} must be numeric, got dtype {arr.dtype}", parameter=name
        )
    return arr.astype(float, copy=False)


def check_range(arr: np.ndarray, name: str, lower: float, upper: float) -> None:
    """
    Verify ``lower <= arr <= upper`` elementwise.

    NaN never satisfies the comparison and is therefore rejected.
    """
    if not np.all((arr >= lower) & (arr <= upper)):
        raise ValidationError(
            f"{name} must be within [{lower:g}, {upper:g}] degrees", parameter=name
        )


def check_positive(arr: np.ndarray, name: str) -> None:
    """Verify every element of *arr* is strictly positive (NaN fails)."""
    if not np.all(arr > 0):
        raise ValidationError(f"{name} must be positive", parameter=name)


def broadcast_pair(
    a: np.ndarray, b: np.ndarray, names: Tuple[str, str] = ("a", "b")
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Expand two arrays to a common shape under the strict scalar-vs-array rule.

    Parameters
    ----------
    a, b : ndarray
        Arrays to combine.  At most one may be non-scalar, unless both
        already share the same shape.
    names : tuple of str
        Argument names used in the error message.

    Returns
    -------
    (ndarray, ndarray)
        Read-only views of *a* and *b* with the common shape.

    Raises
    ------
    ValidationError
        If both inputs are non-scalar with different shapes.

    Examples
    --------
    >>> lat, lon = broadcast_pair(np.array([30., 40., 50.]), np.array(-119.))
    >>> lon
    array([-119., -119., -119.])
    """
    if a.ndim and b.ndim and a.shape != b.shape:
        raise ValidationError(
            f"if not scalars, {names[0]} and {names[1]} must be the same shape "
            f"(got {a.shape} and {b.shape})"
        )
    shape = a.shape if a.ndim else b.shape
    return np.broadcast_to(a, shape), np.broadcast_to(b, shape)


def check_conforms(arr: np.ndarray, shape: Tuple[int, ...], name: str) -> None:
    """Require *arr* to be a scalar or to have exactly *shape*."""
    if arr.ndim and arr.shape != shape:
        raise ValidationError(
            f"if not a scalar, {name} must have shape {shape} (got {arr.shape})",
            parameter=name,
        )


def validate_geometry(
    latitude: ArrayLike,
    longitude: ArrayLike,
    declination: ArrayLike,
    sub_solar_longitude: ArrayLike,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Validate observer and solar coordinates and bring them to one shape.

    Parameters
    ----------
    latitude, longitude : float or array_like
        Observer location (degrees).  If both are arrays they must have
        the same shape; this location shape sets the output shape.
    declination, sub_solar_longitude : float or array_like
        Sub-solar point (degrees).  Each array must match the location
        shape exactly.  For a scalar location the solar arrays set the
        output shape and must agree with each other.

    Returns
    -------
    tuple of ndarray
        ``(latitude, longitude, declination, sub_solar_longitude)``, all
        with the common shape (0-d for all-scalar input).

    Raises
    ------
    ValidationError
        On a non-numeric value, an out-of-range value (including NaN),
        or incompatible shapes.
    """
    values = {
        "latitude": latitude,
        "longitude": longitude,
        "declination": declination,
        "sub_solar_longitude": sub_solar_longitude,
    }
    arrays = {}
    for name, value in values.items():
        arr = as_numeric_array(value, name)
        lower, upper = VALID_RANGE[name]
        check_range(arr, name, lower, upper)
        arrays[name] = arr

    lat, lon = broadcast_pair(
        arrays["latitude"], arrays["longitude"], ("latitude", "longitude")
    )
    dec = arrays["declination"]
    omega = arrays["sub_solar_longitude"]

    if lat.ndim:
        check_conforms(dec, lat.shape, "declination")
        check_conforms(omega, lat.shape, "sub_solar_longitude")
        shape = lat.shape
    else:
        dec, omega = broadcast_pair(dec, omega, ("declination", "sub_solar_longitude"))
        shape = dec.shape

    logger.debug("validated geometry inputs, broadcast shape %s", shape)
    return (
        np.broadcast_to(lat, shape),
        np.broadcast_to(lon, shape),
        np.broadcast_to(dec, shape),
        np.broadcast_to(omega, shape),
    )


def validate_flag(value, name: str = "zero_below_horizon") -> bool:
    """Accept a bool or numeric scalar flag and return it as ``bool``."""
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (Number, np.number)) and not isinstance(value, complex):
        return bool(value)
    raise ValidationError(
        f"{name} must be a boolean or numeric scalar", parameter=name
    )
