"""Tests for the tdb2tt command line tool."""
import numpy as np
import pytest
from click.testing import CliRunner

from tdbtt.cli.convert import tdb2tt_cli
from tdbtt.core import tdb2tt, tt2tdb
from tdbtt.utils import jd_diff_seconds


@pytest.fixture
def runner():
    return CliRunner()


def _parse(stdout):
    jd1, jd2 = (float(x) for x in stdout.split())
    return jd1, jd2


class TestCLI:
    def test_basic(self, runner, sample_jd_tdb, atol_sec):
        result = runner.invoke(tdb2tt_cli, ["2460676.5", "0.25", "-d", "69.2"])
        assert result.exit_code == 0, result.output
        tt = _parse(result.stdout)
        ref = tdb2tt(*sample_jd_tdb, 69.2)
        assert abs(jd_diff_seconds(*tt, *ref)) < atol_sec

    def test_clock_loc(self, runner, sample_jd_tdb, atol_sec):
        result = runner.invoke(
            tdb2tt_cli, ["2460676.5", "0.25", "-d", "69.2", "-c", "6378137", "0", "0"]
        )
        assert result.exit_code == 0, result.output
        ref = tdb2tt(*sample_jd_tdb, 69.2, np.array([6378137.0, 0.0, 0.0]))
        assert abs(jd_diff_seconds(*_parse(result.stdout), *ref)) < atol_sec

    def test_inverse(self, runner, sample_jd_tdb, atol_sec):
        result = runner.invoke(tdb2tt_cli, ["2460676.5", "0.25", "-d", "69.2", "--inverse"])
        assert result.exit_code == 0, result.output
        ref = tt2tdb(*sample_jd_tdb, 69.2)
        assert abs(jd_diff_seconds(*_parse(result.stdout), *ref)) < atol_sec

    def test_single_jd(self, runner):
        result = runner.invoke(tdb2tt_cli, ["2460676.75", "-d", "69.2"])
        assert result.exit_code == 0, result.output
        tt1, tt2 = _parse(result.stdout)
        assert abs((tt1 - 2460676.75 + tt2) * 86400) < 2.0e-3

    def test_iers_lookup(self, runner):
        result = runner.invoke(tdb2tt_cli, ["2458849.5", "0.1"])
        assert result.exit_code == 0, result.output

    def test_unacceptable_date(self, runner):
        result = runner.invoke(tdb2tt_cli, ["2000000000", "0", "-d", "69.2"])
        assert result.exit_code == 1
        assert "Error: Unacceptable date provided." in result.output

    def test_dubious_year(self, runner):
        result = runner.invoke(tdb2tt_cli, ["2488069.5", "0", "-d", "69.2"])
        assert result.exit_code == 0
        assert "Warning: Dubious year provided." in result.output

    @pytest.mark.parametrize("max_iter", ["0", "1"])
    def test_bad_max_iter(self, runner, max_iter):
        result = runner.invoke(tdb2tt_cli, ["2460676.5", "0.25", "--max-iter", max_iter])
        assert result.exit_code == 2
