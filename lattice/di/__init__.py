"""
Lattice Dependency Injection System

Singleton container with string keys, lazy realization and
post-construction property injection.

Key Features:
- Zero-argument factories registered under stable keys
- Lazy, single-flight singleton realization
- Property injection driven by an explicit dependency map
- Declarative @Provide / Inject markers applied by an explicit bootstrap pass
- Diagnostic events for registration, resolution and injection
"""

from .core import (
    Container,
)

from .decorators import (
    Provide,
    Inject,
    inject,
)

from .registrar import (
    Registrar,
    injection_points,
)

from .diagnostics import (
    DIDiagnostics,
    DIEvent,
    DIEventType,
    ConsoleDiagnosticListener,
    RecordingDiagnosticListener,
)

from .errors import (
    DIError,
    ProviderNotFoundError,
    RegistrationError,
)

__all__ = [
    # Core
    "Container",

    # Decorators
    "Provide",
    "Inject",
    "inject",

    # Registrar
    "Registrar",
    "injection_points",

    # Diagnostics
    "DIDiagnostics",
    "DIEvent",
    "DIEventType",
    "ConsoleDiagnosticListener",
    "RecordingDiagnosticListener",

    # Errors
    "DIError",
    "ProviderNotFoundError",
    "RegistrationError",
]
