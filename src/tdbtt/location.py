import numpy as np
from astropy import units as u
from astropy.coordinates import EarthLocation

from .configs import M2KM

__all__ = ["cylindrical_coords"]


def cylindrical_coords(clock_loc=None):
    """Convert a clock location to the cylindrical coordinates used by ``dtdb``.

    Clocks that are synchronized with respect to TT are not synchronized with
    respect to TDB, so the TDB-TT offset depends on where the clock is.

    Parameters
    ----------
    clock_loc : array-like, `~astropy.coordinates.EarthLocation`, optional
        Location of the clock in the Terrestrial Intermediate Reference
        System (TIRS). Using the ITRS instead makes no practical difference.
        A plain array must be a 3-vector (shape ``(3,)`` or ``(3, 1)``) in
        meters; a `~astropy.units.Quantity` is converted to meters. If `None`
        (default), the clock is at the center of the Earth.

    Returns
    -------
    elong : float
        East longitude of the clock in radians.

    u_km : float
        Distance from the Earth's spin axis in km.

    v_km : float
        Distance north of the equatorial plane in km.

    Raises
    ------
    ValueError
        If the clock location is not a 3-vector.

    TypeError
        If the clock location is not real-valued.
    """
    if clock_loc is None:
        return 0.0, 0.0, 0.0

    if isinstance(clock_loc, EarthLocation):
        xyz = np.array([c.to_value(u.m) for c in clock_loc.geocentric], dtype=float)
    elif isinstance(clock_loc, u.Quantity):
        xyz = clock_loc.to_value(u.m)
    else:
        xyz = np.asarray(clock_loc)

    if xyz.shape not in ((3,), (3, 1)):
        raise ValueError("The dimensionality of the clock location is incorrect.")
    if not np.issubdtype(xyz.dtype, np.number) or np.iscomplexobj(xyz):
        raise TypeError(f"The clock location must be real numbers, got {xyz.dtype=}.")

    x, y, z = xyz.astype(float).ravel() * M2KM
    return float(np.arctan2(y, x)), float(np.hypot(x, y)), float(z)
