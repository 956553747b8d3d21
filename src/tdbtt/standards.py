"""Time-standards routines used by the converters.

The converters never call ERFA directly; they go through a `TimeStandards`
object so that a stub can be injected (``standards=...``). The interface
follows the SOFA status conventions:

- ``0``: OK
- ``+1``: dubious year (the leap-second table is not reliable there)
- negative: unacceptable date / failed conversion

`ErfaStandards` is the default implementation, backed by ``pyerfa``.
"""

import logging
import warnings

import erfa
import numpy as np

logger = logging.getLogger(__name__)

__all__ = ["TimeStandards", "ErfaStandards", "get_standards"]


class TimeStandards:
    """Interface of the time-standards library.

    All dates are two-part Julian dates. Conversions return
    ``(jd1, jd2, status)``.
    """

    def ttut1(self, tt1, tt2, dt):
        """TT to UT1, given ``dt`` = TT-UT1 in seconds."""
        raise NotImplementedError

    def tttai(self, tt1, tt2):
        """TT to TAI."""
        raise NotImplementedError

    def taiutc(self, tai1, tai2):
        """TAI to UTC."""
        raise NotImplementedError

    def utctai(self, utc1, utc2):
        """UTC to TAI."""
        raise NotImplementedError

    def dtdb(self, tdb1, tdb2, ut, elong, u, v):
        """TDB-TT in seconds.

        Parameters
        ----------
        tdb1, tdb2 : float or array-like
            Date (TDB, TT is also fine).

        ut : float or array-like
            UT1 as a fraction of the day, counted from midnight.

        elong : float or array-like
            East longitude of the clock (radians).

        u, v : float or array-like
            Distance from the Earth's spin axis and north of the equatorial
            plane (km).
        """
        raise NotImplementedError

    def tdbtt(self, tdb1, tdb2, dtr):
        """TDB to TT, given ``dtr`` = TDB-TT in seconds."""
        raise NotImplementedError

    def tttdb(self, tt1, tt2, dtr):
        """TT to TDB, given ``dtr`` = TDB-TT in seconds."""
        raise NotImplementedError


def _call_erfa(func, *args):
    """Call an ERFA routine and turn its errors/warnings into a status.

    Returns
    -------
    out : tuple or None
        The outputs of `func`, `None` if it raised.

    status : int
        0 if clean, +1 if an `erfa.ErfaWarning` was issued, -1 if an
        `erfa.ErfaError` was raised.
    """
    status = 0
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", erfa.ErfaWarning)
        try:
            out = func(*args)
        except erfa.ErfaError as e:
            logger.debug("erfa.%s failed: %s", func.__name__, e)
            return None, -1

    for w in caught:
        if issubclass(w.category, erfa.ErfaWarning):
            logger.debug("erfa.%s warned: %s", func.__name__, w.message)
            status = 1
        else:
            warnings.warn_explicit(w.message, w.category, w.filename, w.lineno)
    return out, status


def _finite(*arrs):
    return all(np.all(np.isfinite(a)) for a in arrs)


class ErfaStandards(TimeStandards):
    """`TimeStandards` backed by ``pyerfa`` (ERFA, i.e., IAU SOFA)."""

    def date_status(self, jd1, jd2):
        """Check the calendar date of a two-part JD against the UTC table.

        ERFA's ``ttut1`` accepts any date silently, so the date is validated
        separately: ``jd2cal`` rejects unacceptable dates and ``dat`` flags
        the years that are outside the leap-second table (before 1960 or
        too far in the future).
        """
        cal, status = _call_erfa(erfa.jd2cal, jd1, jd2)
        if status < 0:
            return status
        _, status = _call_erfa(erfa.dat, *cal)
        return status

    def ttut1(self, tt1, tt2, dt):
        status = self.date_status(tt1, tt2)
        if status < 0:
            return None, None, status
        ut11, ut12 = erfa.ttut1(tt1, tt2, dt)
        return ut11, ut12, status

    def tttai(self, tt1, tt2):
        out, status = _call_erfa(erfa.tttai, tt1, tt2)
        if status < 0:
            return None, None, status
        return out[0], out[1], status

    def taiutc(self, tai1, tai2):
        out, status = _call_erfa(erfa.taiutc, tai1, tai2)
        if status < 0:
            return None, None, status
        return out[0], out[1], status

    def utctai(self, utc1, utc2):
        out, status = _call_erfa(erfa.utctai, utc1, utc2)
        if status < 0:
            return None, None, status
        return out[0], out[1], status

    def dtdb(self, tdb1, tdb2, ut, elong, u, v):
        return erfa.dtdb(tdb1, tdb2, ut, elong, u, v)

    def tdbtt(self, tdb1, tdb2, dtr):
        out, status = _call_erfa(erfa.tdbtt, tdb1, tdb2, dtr)
        if status < 0 or not _finite(*out):
            return None, None, -1
        return out[0], out[1], status

    def tttdb(self, tt1, tt2, dtr):
        out, status = _call_erfa(erfa.tttdb, tt1, tt2, dtr)
        if status < 0 or not _finite(*out):
            return None, None, -1
        return out[0], out[1], status


_DEFAULT_STANDARDS = ErfaStandards()


def get_standards(standards=None):
    """Return `standards` or the shared `ErfaStandards` instance."""
    if standards is None:
        return _DEFAULT_STANDARDS
    return standards
