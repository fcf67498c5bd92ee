"""
conftest.py
===========
Session-level pytest configuration.

Custom marks
------------
large_scale
    Applied to tests that build forests large enough to take several
    seconds.  Deselect with ``-m "not large_scale"``.
"""


def pytest_configure(config):
    """Register custom marks before test collection begins."""
    config.addinivalue_line(
        "markers",
        "large_scale: builds a large random forest (slow, deselect with "
        '-m "not large_scale")',
    )
