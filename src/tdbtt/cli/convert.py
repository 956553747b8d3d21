"""TDB <-> TT conversion CLI tool.

Delegates to :func:`~tdbtt.core.convert_tdb_to_tt` (or
:func:`~tdbtt.core.convert_tt_to_tdb` with ``--inverse``) and prints the two
parts of the resulting Julian date.
"""

import sys

import click

from ..configs import DEFAULT_MAX_ITER, DEFAULT_TOL_SEC, MIN_ITER
from ..core import convert_tdb_to_tt, convert_tt_to_tdb
from ..logging import set_log_level
from ..utils import split_jd


@click.command(name="tdb2tt")
@click.argument("jd1", type=float)
@click.argument("jd2", type=float, default=0.0, required=False)
@click.option(
    "-d",
    "--delta-tt-ut1",
    type=float,
    default=None,
    help="TT-UT1 in seconds. Looked up from the IERS tables if omitted.",
)
@click.option(
    "-c",
    "--clock-loc",
    type=float,
    nargs=3,
    default=None,
    metavar="X Y Z",
    help="Clock location in TIRS/ITRS (meters). Default is the geocenter.",
)
@click.option(
    "--max-iter",
    type=click.IntRange(min=MIN_ITER),
    default=DEFAULT_MAX_ITER,
    show_default=True,
    help="Maximum number of fixed point passes (TDB -> TT only).",
)
@click.option(
    "--tol",
    type=click.FloatRange(min=0),
    default=DEFAULT_TOL_SEC,
    show_default=True,
    help="Convergence tolerance in seconds (TDB -> TT only).",
)
@click.option("--inverse", is_flag=True, help="Convert TT to TDB instead.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
)
def tdb2tt_cli(jd1, jd2, delta_tt_ut1, clock_loc, max_iter, tol, inverse, log_level):
    """Convert a two-part Julian date from TDB to TT (or TT to TDB).

    JD1, JD2: the two parts of the Julian date (JD2 defaults to 0).

    Examples::

        tdb2tt 2460676.5 0.25
        tdb2tt 2460676.5 0.25 -d 69.2 -c 6378137 0 0
        tdb2tt 2460676.5 0.2499992 --inverse
    """
    set_log_level(log_level.upper())
    if not clock_loc:
        clock_loc = None
    jd1, jd2 = split_jd(jd1, jd2)

    if inverse:
        result = convert_tt_to_tdb(jd1, jd2, delta_tt_ut1, clock_loc)
    else:
        result = convert_tdb_to_tt(
            jd1, jd2, delta_tt_ut1, clock_loc, max_iter=max_iter, tol=tol
        )

    if not result.ok:
        for msg in result.messages:
            click.echo(f"Error: {msg}", err=True)
        sys.exit(1)

    for msg in result.messages:
        click.echo(f"Warning: {msg}", err=True)
    click.echo(f"{result.jd1!r} {result.jd2!r}")


if __name__ == "__main__":
    tdb2tt_cli()
