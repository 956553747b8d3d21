# Very simple utility functions for two-part Julian dates
from astropy.time.utils import day_frac
import numpy as np

from .configs import DAYSEC

__all__ = [
    "split_jd",
    "fraction_of_day",
    "jd_diff_seconds",
]


def split_jd(jd1, jd2=0.0):
    """Normalize a two-part JD into (integer day, fraction in [-0.5, 0.5]).

    Parameters
    ----------
    jd1, jd2 : float or array-like
        Two parts of the Julian date. The full date is ``jd1 + jd2``; the
        split point is arbitrary.

    Returns
    -------
    day, frac : float or ndarray
        The same date with ``day`` integral, computed without losing the
        precision carried by `jd2`.
    """
    return day_frac(np.asarray(jd1, dtype=float), np.asarray(jd2, dtype=float))


def fraction_of_day(jd1, jd2):
    """Fraction of the day, counted from midnight, of a two-part JD.

    Julian days start at noon, so the JD fraction is shifted by half a day.
    Each part is reduced separately so that no precision is lost to the
    large integer part of the date.
    """
    jd1 = np.asarray(jd1, dtype=float)
    jd2 = np.asarray(jd2, dtype=float)
    frac = (jd1 - np.floor(jd1)) + (jd2 - np.floor(jd2)) - 0.5
    return frac - np.floor(frac)


def jd_diff_seconds(a1, a2, b1, b2):
    """Difference ``(a1 + a2) - (b1 + b2)`` in seconds, pairwise to keep precision."""
    return ((np.asarray(a1) - b1) + (np.asarray(a2) - b2)) * DAYSEC
