"""
Base error types shared across Lattice packages.
"""

from typing import List


class LatticeError(Exception):
    """Base exception for Lattice errors."""
    pass


class InvalidRouteError(LatticeError):
    """Route decorator used with an unsupported HTTP method."""

    def __init__(self, method: str, allowed: List[str]):
        self.method = method
        self.allowed = allowed

        msg = f"Unsupported HTTP method {method!r}"
        msg += "\n\nSupported methods:"
        for verb in allowed:
            msg += f"\n  - {verb}"

        super().__init__(msg)
