"""Test suite for tdbtt package.

Run tests with: pytest tests/ -v

Test markers:
    -m "not slow"      - Skip tests that read the IERS tables

The IERS auto-download is disabled in conftest, so no test needs network.
"""
