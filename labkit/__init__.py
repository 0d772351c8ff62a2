"""Exercise programs, a P2 PGM image tool and a small unit-test runner with TAP and XUnit output."""

__version__ = "0.1.0"