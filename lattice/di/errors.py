"""
DI-specific error types with rich diagnostics.
"""

from typing import List, Optional

from ..errors import LatticeError


class DIError(LatticeError):
    """Base exception for DI errors."""
    pass


class ProviderNotFoundError(DIError):
    """No factory registered for the requested key."""

    def __init__(
        self,
        key: str,
        candidates: Optional[List[str]] = None,
        requested_by: Optional[str] = None,
    ):
        self.key = key
        self.candidates = candidates or []
        self.requested_by = requested_by

        msg = f"No provider registered for key={key!r}"

        if requested_by:
            msg += f"\nRequested by: {requested_by}"

        if self.candidates:
            msg += "\n\nRegistered keys:"
            for candidate in self.candidates:
                msg += f"\n  - {candidate}"

        msg += "\n\nSuggested fixes:"
        msg += f"\n  - Decorate the class with @Provide({key!r}) and pass it to bootstrap()"
        msg += f"\n  - Call container.register({key!r}, factory) before resolving"

        super().__init__(msg)


class RegistrationError(DIError):
    """Bootstrap was handed something it cannot register."""

    def __init__(self, target: object, reason: str):
        self.target = target
        self.reason = reason
        super().__init__(f"Cannot register {target!r}: {reason}")
