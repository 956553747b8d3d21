"""Earth orientation parameters (EOP): the TT-UT1 offset for a given date.

The offset is needed to go from TT to UT1. It is only looked up when the
caller does not supply it. Sources are keyed by UTC, so the lookup helper
first goes TT -> TAI -> UTC with the time-standards routines.

Sources
-------
- `IERSSource`: astropy's IERS tables (`astropy.utils.iers`). By default the
  table of ``astropy.utils.iers.earth_orientation_table`` is used, which
  honors ``astropy.utils.iers.conf`` (e.g., ``auto_download``).
- `FixedEOP`: a constant offset (e.g., for deterministic tests).
"""

import logging

import numpy as np
from astropy import units as u
from astropy.utils import iers

from .configs import DAYSEC, TTMTAI
from .results import TimeScaleError
from .standards import get_standards

logger = logging.getLogger(__name__)

__all__ = [
    "EOPSource",
    "IERSSource",
    "FixedEOP",
    "get_eop",
    "delta_tt_ut1_from_eop",
]


class EOPSource:
    """Interface of an Earth orientation data source."""

    def tt_minus_ut1(self, utc1, utc2, standards=None):
        """TT-UT1 in seconds at the given two-part UTC Julian date.

        `standards` are the time-standards routines of the caller, for
        sources that need time-scale arithmetic of their own.
        """
        raise NotImplementedError


class FixedEOP(EOPSource):
    """EOP source that always returns the same TT-UT1.

    Parameters
    ----------
    delta_tt_ut1 : float
        TT-UT1 in seconds.

    Attributes
    ----------
    ncalls : int
        Number of lookups made so far.
    """

    def __init__(self, delta_tt_ut1):
        self.delta_tt_ut1 = delta_tt_ut1
        self.ncalls = 0

    def tt_minus_ut1(self, utc1, utc2, standards=None):
        self.ncalls += 1
        return self.delta_tt_ut1


class IERSSource(EOPSource):
    """EOP source backed by an astropy IERS table.

    Parameters
    ----------
    table : `~astropy.utils.iers.IERS`, optional
        The table to use (e.g., ``iers.IERS_B.open()``). If `None` (default),
        ``iers.earth_orientation_table.get()`` is used at each lookup, so
        that changes made through ``earth_orientation_table.set(...)`` are
        picked up.
    """

    def __init__(self, table=None):
        self._table = table

    @property
    def table(self):
        if self._table is None:
            return iers.earth_orientation_table.get()
        return self._table

    def ut1_minus_utc(self, utc1, utc2):
        """UT1-UTC in seconds from the IERS table.

        Dates outside the table are logged; astropy then holds the edge value.
        """
        dut1, status = self.table.ut1_utc(utc1, utc2, return_status=True)
        status = np.atleast_1d(status)
        if np.any(status == iers.TIME_BEFORE_IERS_RANGE):
            logger.warning("UTC date is before the IERS table range; UT1-UTC is extrapolated.")
        if np.any(status == iers.TIME_BEYOND_IERS_RANGE):
            logger.warning("UTC date is beyond the IERS table range; UT1-UTC is extrapolated.")
        return dut1.to_value(u.s)

    def tt_minus_ut1(self, utc1, utc2, standards=None):
        """TT-UT1 = (TT-TAI) + (TAI-UTC) - (UT1-UTC), in seconds.

        TAI-UTC comes from `standards` (ERFA by default); a dubious year is
        already reported by the TAI -> UTC step of the lookup.
        """
        tai1, tai2, status = get_standards(standards).utctai(utc1, utc2)
        if status < 0:
            raise TimeScaleError("Unacceptable date entered.")
        tai_m_utc = ((tai1 - utc1) + (tai2 - utc2)) * DAYSEC
        return TTMTAI + tai_m_utc - self.ut1_minus_utc(utc1, utc2)


_DEFAULT_EOP = None


def get_eop(eop=None):
    """Return `eop` or the shared `IERSSource` instance."""
    global _DEFAULT_EOP
    if eop is not None:
        return eop
    if _DEFAULT_EOP is None:
        _DEFAULT_EOP = IERSSource()
    return _DEFAULT_EOP


def delta_tt_ut1_from_eop(tt1, tt2, standards=None, eop=None):
    """Get TT-UT1 for a time given in TT from an EOP source.

    Parameters
    ----------
    tt1, tt2 : float or array-like
        Two parts of the Julian date in TT.

    standards : `~tdbtt.standards.TimeStandards`, optional
        Time-standards routines. Default is ERFA.

    eop : `EOPSource`, optional
        Earth orientation data source. Default is astropy's IERS table.

    Returns
    -------
    delta_tt_ut1 : float or ndarray
        TT-UT1 in seconds.

    status : int
        0 if OK, 1 if the UTC year is dubious.

    Raises
    ------
    TimeScaleError
        If TAI or UTC cannot be computed for the date.
    """
    standards = get_standards(standards)
    eop = get_eop(eop)

    tai1, tai2, status = standards.tttai(tt1, tt2)
    if status < 0:
        raise TimeScaleError("An error occurred computing TAI.")

    utc1, utc2, status = standards.taiutc(tai1, tai2)
    if status < 0:
        raise TimeScaleError("Unacceptable date entered.")

    delta_tt_ut1 = eop.tt_minus_ut1(utc1, utc2, standards=standards)
    logger.debug("TT-UT1 from %s: %s s", type(eop).__name__, delta_tt_ut1)
    return delta_tt_ut1, status
