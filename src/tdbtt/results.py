"""Structured results of the time-scale conversions.

A conversion never aborts through the host's error channel. It returns a
`TimeResult` whose `status` tells whether the value is usable:

- ``Status.OK``: value is valid, nothing to report.
- ``Status.ADVISORY``: value is valid, but something (e.g., a dubious year)
  should be surfaced to the user.
- ``Status.FATAL``: no value; `messages` explains why.

Callers that prefer exceptions use `TimeResult.unwrap`.
"""

import logging
import warnings
from enum import IntEnum

import numpy as np

logger = logging.getLogger(__name__)

__all__ = [
    "Status",
    "TimeResult",
    "TimeScaleError",
    "TimeScaleWarning",
    "DubiousYearWarning",
    "ConvergenceWarning",
]


class TimeScaleError(ValueError):
    """A date is unacceptable or an intermediate conversion failed."""


class TimeScaleWarning(UserWarning):
    """Base class of the advisories of the conversions."""


class DubiousYearWarning(TimeScaleWarning):
    """The date is outside the span where the leap-second table is reliable."""


class ConvergenceWarning(TimeScaleWarning):
    """The fixed point iteration stopped before reaching the tolerance."""


class Status(IntEnum):
    """Outcome of a conversion. Ordered by severity."""

    OK = 0
    ADVISORY = 1
    FATAL = 2


def _as_output(x):
    """Return python float for 0-d input, ndarray otherwise."""
    x = np.asarray(x, dtype=float)
    if x.ndim == 0:
        return float(x)
    return x


class TimeResult:
    """Result of a time-scale conversion.

    Attributes
    ----------
    status : Status
        OK, ADVISORY or FATAL.

    jd1, jd2 : float, ndarray or None
        Two parts of the resulting Julian date. `None` when fatal.

    messages : tuple of str
        Advisory texts (ADVISORY) or the error text (FATAL).

    categories : tuple of type
        Warning class of each advisory in `messages` (empty when FATAL).

    iterations : int
        Number of fixed point passes that were run.

    converged : bool
        Whether the last pass moved the estimate by no more than the
        tolerance.

    delta_tt_ut1 : float, ndarray or None
        The last TT-UT1 offset (seconds) that was used.
    """

    def __init__(
        self,
        status,
        jd1=None,
        jd2=None,
        messages=(),
        categories=None,
        iterations=0,
        converged=True,
        delta_tt_ut1=None,
    ):
        self.status = Status(status)
        if self.status is Status.FATAL:
            self.jd1 = None
            self.jd2 = None
        else:
            self.jd1 = _as_output(jd1)
            self.jd2 = _as_output(jd2)
        self.messages = tuple(messages)
        if self.status is Status.FATAL:
            self.categories = ()
        elif categories is None:
            self.categories = (DubiousYearWarning,) * len(self.messages)
        else:
            self.categories = tuple(categories)
        self.iterations = iterations
        self.converged = converged
        self.delta_tt_ut1 = None if delta_tt_ut1 is None else _as_output(delta_tt_ut1)

    @classmethod
    def fatal(cls, message, iterations=0, delta_tt_ut1=None):
        """Make a FATAL result and log it."""
        logger.warning(message)
        return cls(
            Status.FATAL,
            messages=(message,),
            iterations=iterations,
            converged=False,
            delta_tt_ut1=delta_tt_ut1,
        )

    @property
    def ok(self):
        """`True` unless the result is FATAL."""
        return self.status is not Status.FATAL

    @property
    def jd(self):
        """The full Julian date (``jd1 + jd2``), loses precision."""
        if not self.ok:
            return None
        return self.jd1 + self.jd2

    def unwrap(self, stacklevel=2):
        """Return ``(jd1, jd2)`` or raise.

        Raises
        ------
        TimeScaleError
            If the result is FATAL.

        Warns
        -----
        TimeScaleWarning
            Once per advisory message (`DubiousYearWarning` or
            `ConvergenceWarning`).
        """
        if self.status is Status.FATAL:
            raise TimeScaleError("; ".join(self.messages))
        for msg, category in zip(self.messages, self.categories):
            warnings.warn(msg, category, stacklevel=stacklevel)
        return self.jd1, self.jd2

    def to_time(self, scale="tt"):
        """Return the value as an `~astropy.time.Time` in `scale`."""
        from astropy.time import Time

        jd1, jd2 = self.unwrap(stacklevel=3)
        return Time(jd1, jd2, format="jd", scale=scale)

    def __iter__(self):
        # allows ``tt1, tt2 = result``
        return iter((self.jd1, self.jd2))

    def __repr__(self):
        return (
            f"TimeResult(status={self.status.name}, jd1={self.jd1!r}, jd2={self.jd2!r}, "
            f"iterations={self.iterations}, converged={self.converged}, "
            f"messages={self.messages!r})"
        )

