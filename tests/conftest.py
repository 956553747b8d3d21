"""Pytest configuration and fixtures for tdbtt tests."""
import numpy as np
import pytest
from astropy.utils import iers

from tdbtt.configs import DAYSEC
from tdbtt.eop import FixedEOP
from tdbtt.standards import TimeStandards


# ==============================================================================
# Fixtures: IERS (never download during tests; the bundled IERS-B is used)
# ==============================================================================
@pytest.fixture(autouse=True, scope="session")
def no_iers_download():
    with iers.conf.set_temp("auto_download", False):
        yield


# ==============================================================================
# Fixtures: Sample dates
# ==============================================================================
@pytest.fixture
def sample_jd_tdb():
    """A sample two-part Julian Date (TDB): 2025-01-01 06:00:00 TDB."""
    return 2460676.5, 0.25


@pytest.fixture
def sample_delta_tt_ut1():
    """TT-UT1 around 2025 (32.184 + 37 - UT1-UTC), in seconds."""
    return 69.2


@pytest.fixture
def jd_dubious():
    """2100-01-01 00:00, beyond the leap-second table."""
    return 2488069.5, 0.0


@pytest.fixture
def jd_unacceptable():
    """Way beyond the range ERFA accepts."""
    return 2.0e9, 0.0


@pytest.fixture
def equator_clock():
    """A clock on the equator at the Greenwich meridian (meters)."""
    return np.array([6378137.0, 0.0, 0.0])


# ==============================================================================
# Fixtures: Stub collaborators
# ==============================================================================
class StubStandards(TimeStandards):
    """Simple arithmetic stand-in for ERFA with configurable statuses.

    ``dtdb`` returns ``dtr`` (seconds). If ``drift`` is given, each call adds
    ``drift`` seconds more, so the fixed point iteration never settles.
    """

    def __init__(
        self,
        dtr=0.0,
        drift=0.0,
        ttut1_status=0,
        tttai_status=0,
        taiutc_status=0,
        utctai_status=0,
        tdbtt_status=0,
        tttdb_status=0,
    ):
        self.dtr = dtr
        self.drift = drift
        self.ttut1_status = ttut1_status
        self.tttai_status = tttai_status
        self.taiutc_status = taiutc_status
        self.utctai_status = utctai_status
        self.utctai_calls = []
        self.tdbtt_status = tdbtt_status
        self.tttdb_status = tttdb_status
        self.dtdb_calls = []

    def ttut1(self, tt1, tt2, dt):
        return tt1, tt2 - dt / DAYSEC, self.ttut1_status

    def tttai(self, tt1, tt2):
        return tt1, tt2 - 32.184 / DAYSEC, self.tttai_status

    def taiutc(self, tai1, tai2):
        return tai1, tai2 - 37.0 / DAYSEC, self.taiutc_status

    def utctai(self, utc1, utc2):
        self.utctai_calls.append((utc1, utc2))
        return utc1, utc2 + 37.0 / DAYSEC, self.utctai_status

    def dtdb(self, tdb1, tdb2, ut, elong, u, v):
        self.dtdb_calls.append((ut, elong, u, v))
        return self.dtr + self.drift * len(self.dtdb_calls)

    def tdbtt(self, tdb1, tdb2, dtr):
        return tdb1, tdb2 - dtr / DAYSEC, self.tdbtt_status

    def tttdb(self, tt1, tt2, dtr):
        return tt1, tt2 + dtr / DAYSEC, self.tttdb_status


@pytest.fixture
def stub_standards():
    return StubStandards()


@pytest.fixture
def make_stub_standards():
    """Factory for `StubStandards` with custom settings."""
    return StubStandards


@pytest.fixture
def fixed_eop(sample_delta_tt_ut1):
    return FixedEOP(sample_delta_tt_ut1)


# ==============================================================================
# Fixtures: Tolerances
# ==============================================================================
@pytest.fixture
def atol_sec():
    """Absolute tolerance for times in seconds (1 ns)."""
    return 1.0e-9


# ==============================================================================
# Markers
# ==============================================================================
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "slow: reads the IERS tables (deselect with -m 'not slow')")
