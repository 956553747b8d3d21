"""Conversion between barycentric dynamical time (TDB) and terrestrial time (TT).

TDB-TT depends on UT1 (through the location of the clock), UT1 depends on
TT, and TT is what we are after. For TDB -> TT this circular dependency is
resolved by fixed point iteration seeded with TT = TDB, which is good to a
couple of milliseconds to begin with. Each pass:

1. (optional) looks up TT-UT1 from the Earth orientation data at the
   current TT estimate,
2. converts the TT estimate to UT1,
3. computes TDB-TT from the TDB date, the UT1 fraction of the day and the
   clock location,
4. converts TDB to a new TT estimate with that offset.

Two passes are always made. More are made until the estimate moves by no
more than ``tol`` seconds, up to ``max_iter`` passes.

All the time-scale arithmetic is done by the time-standards routines
(`tdbtt.standards`, ERFA by default) and TT-UT1 comes from an Earth
orientation source (`tdbtt.eop`, astropy's IERS tables by default). Both
can be injected for testing.
"""

import logging

import numpy as np

from .configs import DEFAULT_MAX_ITER, DEFAULT_TOL_SEC, MIN_ITER
from .eop import delta_tt_ut1_from_eop
from .location import cylindrical_coords
from .results import (
    ConvergenceWarning,
    DubiousYearWarning,
    Status,
    TimeResult,
    TimeScaleError,
)
from .standards import get_standards
from .utils import fraction_of_day, jd_diff_seconds

logger = logging.getLogger(__name__)

__all__ = [
    "convert_tdb_to_tt",
    "convert_tt_to_tdb",
    "tdb2tt",
    "tt2tdb",
]


MSG_DUBIOUS_YEAR = "Dubious year provided."
MSG_DUBIOUS_DATE = "Dubious date entered."
MSG_UNACCEPTABLE_DATE = "Unacceptable date provided."
MSG_TDBTT_FAILED = "An error occurred during an intermediate conversion from TDB to TT."
MSG_TTTDB_FAILED = "An error occurred during the conversion from TT to TDB."


class _Advisories:
    """Ordered, de-duplicated advisory messages with their warning classes."""

    def __init__(self):
        self._items = {}

    def add(self, message, category=DubiousYearWarning):
        if message not in self._items:
            logger.info(message)
            self._items[message] = category

    def __bool__(self):
        return bool(self._items)

    @property
    def messages(self):
        return tuple(self._items)

    @property
    def categories(self):
        return tuple(self._items.values())


def _check_iter_args(max_iter, tol):
    if isinstance(max_iter, bool) or int(max_iter) != max_iter or max_iter < 1:
        raise ValueError(f"max_iter must be a positive integer, got {max_iter=}.")
    if tol is not None and not tol >= 0:
        raise ValueError(f"tol must be non-negative or None, got {tol=}.")
    # the convergence test needs a previous refined estimate
    if tol is not None and max_iter < MIN_ITER:
        raise ValueError(
            f"max_iter must be at least {MIN_ITER} unless tol is None, got {max_iter=}."
        )


def _as_jd_pair(jd1, jd2):
    jd1, jd2 = np.broadcast_arrays(np.asarray(jd1, dtype=float), np.asarray(jd2, dtype=float))
    if not (np.all(np.isfinite(jd1)) and np.all(np.isfinite(jd2))):
        raise ValueError("The Julian date must be finite.")
    return jd1, jd2


def _lookup_delta_tt_ut1(tt1, tt2, standards, eop, advisories):
    """TT-UT1 from the EOP source; raises `TimeScaleError` for bad dates."""
    delta_tt_ut1, status = delta_tt_ut1_from_eop(tt1, tt2, standards=standards, eop=eop)
    if status > 0:
        advisories.add(MSG_DUBIOUS_DATE)
    return delta_tt_ut1


def convert_tdb_to_tt(
    tdb1,
    tdb2,
    delta_tt_ut1=None,
    clock_loc=None,
    *,
    max_iter=DEFAULT_MAX_ITER,
    tol=DEFAULT_TOL_SEC,
    standards=None,
    eop=None,
):
    """Convert TDB to TT to nanosecond accuracy (if TT-UT1 is accurate).

    Parameters
    ----------
    tdb1, tdb2 : float or array-like
        Two parts of a Julian date given in TDB (days). The full date is the
        sum of both terms; it does not matter how the date is split. Arrays
        are broadcast together.

    delta_tt_ut1 : float or array-like, optional
        TT-UT1 in seconds. If `None` (default), it is looked up from `eop`
        at each pass, using the current TT estimate.

    clock_loc : array-like or `~astropy.coordinates.EarthLocation`, optional
        Location of the clock in TIRS (ITRS is fine too), in meters. See
        `~tdbtt.location.cylindrical_coords`. If `None` (default), a clock at
        the center of the Earth is used.

    max_iter : int, optional
        Maximum number of fixed point passes. Must be at least
        `~tdbtt.configs.MIN_ITER` (2) unless `tol` is `None`.
        Default is `~tdbtt.configs.DEFAULT_MAX_ITER`.

    tol : float or None, optional
        Stop once a pass moves the TT estimate by no more than this (seconds).
        If `None`, exactly `max_iter` passes are run and the result is
        reported as converged (``max_iter=2, tol=None`` is the classic
        two-pass procedure).
        Default is `~tdbtt.configs.DEFAULT_TOL_SEC` (1 ns).

    standards : `~tdbtt.standards.TimeStandards`, optional
        Time-standards routines. Default is ERFA.

    eop : `~tdbtt.eop.EOPSource`, optional
        Earth orientation data source, only used if `delta_tt_ut1` is `None`.
        Default is astropy's IERS table.

    Returns
    -------
    result : `~tdbtt.results.TimeResult`
        The TT date as ``result.jd1, result.jd2``. ``result.status`` is FATAL
        if a date was unacceptable or an intermediate conversion failed, and
        ADVISORY if a year is dubious or the iteration did not converge.

    Raises
    ------
    ValueError, TypeError
        For malformed arguments (including non-finite dates), before any
        computation.
    """
    _check_iter_args(max_iter, tol)
    elong, u_km, v_km = cylindrical_coords(clock_loc)
    standards = get_standards(standards)
    tdb1, tdb2 = _as_jd_pair(tdb1, tdb2)

    lookup_eop = delta_tt_ut1 is None
    advisories = _Advisories()

    # The initial estimate for TT is TDB.
    tt1, tt2 = tdb1, tdb2
    converged = tol is None
    change = np.inf
    niter = 0
    while niter < max_iter:
        niter += 1
        if lookup_eop:
            try:
                delta_tt_ut1 = _lookup_delta_tt_ut1(tt1, tt2, standards, eop, advisories)
            except TimeScaleError as e:
                return TimeResult.fatal(str(e), iterations=niter)

        ut11, ut12, status = standards.ttut1(tt1, tt2, delta_tt_ut1)
        if status < 0:
            return TimeResult.fatal(
                MSG_UNACCEPTABLE_DATE, iterations=niter, delta_tt_ut1=delta_tt_ut1
            )
        if status > 0:
            advisories.add(MSG_DUBIOUS_YEAR)

        ut = fraction_of_day(ut11, ut12)
        dtr = standards.dtdb(tdb1, tdb2, ut, elong, u_km, v_km)

        new1, new2, status = standards.tdbtt(tdb1, tdb2, dtr)
        if status < 0:
            return TimeResult.fatal(
                MSG_TDBTT_FAILED, iterations=niter, delta_tt_ut1=delta_tt_ut1
            )

        change = float(np.max(np.abs(jd_diff_seconds(new1, new2, tt1, tt2)), initial=0.0))
        tt1, tt2 = new1, new2
        logger.debug("TDB->TT pass %d: TDB-TT = %s s, change = %.3e s", niter, dtr, change)

        if tol is not None and niter >= MIN_ITER and change <= tol:
            converged = True
            break

    if not converged:
        advisories.add(
            f"TT did not converge to {tol:.1e} s in {max_iter} passes "
            f"(last change {change:.3e} s).",
            ConvergenceWarning,
        )

    return TimeResult(
        Status.ADVISORY if advisories else Status.OK,
        tt1,
        tt2,
        messages=advisories.messages,
        categories=advisories.categories,
        iterations=niter,
        converged=converged,
        delta_tt_ut1=delta_tt_ut1,
    )


def convert_tt_to_tdb(
    tt1,
    tt2,
    delta_tt_ut1=None,
    clock_loc=None,
    *,
    standards=None,
    eop=None,
):
    """Convert TT to TDB to nanosecond accuracy (if TT-UT1 is accurate).

    Unlike `convert_tdb_to_tt`, no iteration is needed: UT1 follows directly
    from TT. ``dtdb`` is evaluated at the TT date, which differs from the TDB
    date by far less than its sensitivity.

    Parameters
    ----------
    tt1, tt2 : float or array-like
        Two parts of a Julian date given in TT (days).

    delta_tt_ut1, clock_loc, standards, eop
        See `convert_tdb_to_tt`.

    Returns
    -------
    result : `~tdbtt.results.TimeResult`
        The TDB date as ``result.jd1, result.jd2``.
    """
    elong, u_km, v_km = cylindrical_coords(clock_loc)
    standards = get_standards(standards)
    tt1, tt2 = _as_jd_pair(tt1, tt2)
    advisories = _Advisories()

    if delta_tt_ut1 is None:
        try:
            delta_tt_ut1 = _lookup_delta_tt_ut1(tt1, tt2, standards, eop, advisories)
        except TimeScaleError as e:
            return TimeResult.fatal(str(e), iterations=1)

    ut11, ut12, status = standards.ttut1(tt1, tt2, delta_tt_ut1)
    if status < 0:
        return TimeResult.fatal(MSG_UNACCEPTABLE_DATE, iterations=1, delta_tt_ut1=delta_tt_ut1)
    if status > 0:
        advisories.add(MSG_DUBIOUS_YEAR)

    ut = fraction_of_day(ut11, ut12)
    dtr = standards.dtdb(tt1, tt2, ut, elong, u_km, v_km)
    tdb1, tdb2, status = standards.tttdb(tt1, tt2, dtr)
    if status < 0:
        return TimeResult.fatal(MSG_TTTDB_FAILED, iterations=1, delta_tt_ut1=delta_tt_ut1)

    return TimeResult(
        Status.ADVISORY if advisories else Status.OK,
        tdb1,
        tdb2,
        messages=advisories.messages,
        categories=advisories.categories,
        iterations=1,
        delta_tt_ut1=delta_tt_ut1,
    )


def tdb2tt(tdb1, tdb2, delta_tt_ut1=None, clock_loc=None, **kwargs):
    """Convert TDB to TT, raising on failure.

    Same as `convert_tdb_to_tt` (see there for the parameters), but returns
    ``(tt1, tt2)`` directly.

    Raises
    ------
    TimeScaleError
        If a date is unacceptable or an intermediate conversion failed.

    Warns
    -----
    DubiousYearWarning, ConvergenceWarning
        For advisories; the value is still returned.
    """
    result = convert_tdb_to_tt(tdb1, tdb2, delta_tt_ut1, clock_loc, **kwargs)
    return result.unwrap(stacklevel=3)


def tt2tdb(tt1, tt2, delta_tt_ut1=None, clock_loc=None, **kwargs):
    """Convert TT to TDB, raising on failure. See `convert_tt_to_tdb`."""
    result = convert_tt_to_tdb(tt1, tt2, delta_tt_ut1, clock_loc, **kwargs)
    return result.unwrap(stacklevel=3)
