"""
Package entry point.

Allows execution via:
    python -m fastmrp
"""

from ._cli import run


if __name__ == "__main__":
    run()
