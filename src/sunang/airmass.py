"""
Relative optical airmass from the cosine of the solar zenith angle.
"""

from typing import Union

import numpy as np

from .constants import KastenYoung

ArrayOrFloat = Union[float, np.ndarray]


def kasten_young(mu0: ArrayOrFloat) -> np.ndarray:
    """
    Kasten & Young (1989) relative optical airmass.

    .. math::
        m = \\frac{1}{\\sin h + a\\,(h + b)^{-c}}

    with solar elevation :math:`h = \\arcsin(\\mu_0)` in degrees and
    :math:`a = 0.50572`, :math:`b = 6.07995`, :math:`c = 1.6364`.

    Parameters
    ----------
    mu0 : float or ndarray
        Cosine of the solar zenith angle (refraction-corrected, when a
        correction is wanted).

    Returns
    -------
    ndarray
        Airmass, 1 at the zenith and about 38 at the horizon.  Elements
        with ``mu0 < 0`` (sun below the horizon) or NaN are NaN.

    Notes
    -----
    The formula slightly undershoots 1 for an overhead sun
    (:math:`1/(1 + a\\,96.08^{-c}) \\approx 0.9997`); such values are
    raised to exactly 1.

    References
    ----------
    Kasten, F., & Young, A. T. (1989). Revised optical air mass tables and
    approximation formula. Applied Optics, 28(22), 4735-4738.
    doi:10.1364/AO.28.004735

    Examples
    --------
    >>> float(kasten_young(1.0))
    1.0
    >>> round(float(kasten_young(0.5)), 3)
    1.994
    >>> np.round(kasten_young(np.array([-0.1, 0.0])), 1)
    array([ nan, 37.9])
    """
    mu0 = np.asarray(mu0, dtype=float)

    # solar elevation in degrees, from horizon upward
    with np.errstate(invalid="ignore"):
        gam = np.degrees(np.arcsin(np.clip(mu0, -1.0, 1.0)))
        above = mu0 >= 0

    airmass = np.full(mu0.shape, np.nan)
    gam_up = gam[above]
    airmass[above] = 1.0 / (
        np.sin(np.radians(gam_up))
        + KastenYoung.A * (gam_up + KastenYoung.B) ** (-KastenYoung.C)
    )

    # slight correction for overhead sun
    airmass[airmass < 1] = 1.0
    return airmass
