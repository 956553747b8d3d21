# Configuration file for tdbtt

__all__ = [
    "DAYSEC",
    "TTMTAI",
    "M2KM",
    "LEGACY_N_ITER",
    "DEFAULT_MAX_ITER",
    "DEFAULT_TOL_SEC",
    "MIN_ITER",
]

# **************************************************************************************** #
#                                    Physical constants                                    #
# **************************************************************************************** #
# Seconds per day.
DAYSEC = 86400.0

# TT - TAI in seconds (fixed by definition).
TTMTAI = 32.184

# Meters to kilometers (ERFA's dtdb takes the clock location in km).
M2KM = 1.0e-3

# **************************************************************************************** #
#                                 TDB -> TT fixed point loop                               #
# **************************************************************************************** #
# The classic procedure simply runs two passes seeded with TT = TDB.
LEGACY_N_ITER = 2

# At least two passes are always made: the first pass only replaces the seed.
MIN_ITER = 2

# Upper bound on the number of passes when iterating to a tolerance.
DEFAULT_MAX_ITER = 10

# Stop once the TT estimate moves by less than this (seconds).
DEFAULT_TOL_SEC = 1.0e-9
