"""
Lattice - Metadata-driven dependency injection and route tables

Complete integration of:
- Metadata: Out-of-band (subject, member, key) store
- DI: Singleton container with property injection
- Registrar: Declarative @Provide / Inject markers applied at bootstrap
- Controllers: Route decorators and an ordered route-table builder
"""

__version__ = "0.1.0"

# ============================================================================
# Metadata
# ============================================================================

from .metadata import MetadataRegistry, MISSING

# ============================================================================
# Dependency Injection
# ============================================================================

from .di import (
    Container,
    Provide,
    Inject,
    inject,
    Registrar,
    DIDiagnostics,
    DIEventType,
    ConsoleDiagnosticListener,
)

# ============================================================================
# Controllers
# ============================================================================

from .controller import (
    Controller,
    GET, POST, PUT, PATCH, DELETE,
    HEAD, OPTIONS,
    route,
    RouteDescriptor,
    RouteTableBuilder,
    find_collisions,
)

# ============================================================================
# Bootstrap
# ============================================================================

from .bootstrap import Wiring, bootstrap

# ============================================================================
# Errors
# ============================================================================

from .errors import LatticeError, InvalidRouteError
from .di.errors import DIError, ProviderNotFoundError, RegistrationError

__all__ = [
    "__version__",

    # Metadata
    "MetadataRegistry",
    "MISSING",

    # DI
    "Container",
    "Provide",
    "Inject",
    "inject",
    "Registrar",
    "DIDiagnostics",
    "DIEventType",
    "ConsoleDiagnosticListener",

    # Controllers
    "Controller",
    "GET", "POST", "PUT", "PATCH", "DELETE",
    "HEAD", "OPTIONS",
    "route",
    "RouteDescriptor",
    "RouteTableBuilder",
    "find_collisions",

    # Bootstrap
    "Wiring",
    "bootstrap",

    # Errors
    "LatticeError",
    "InvalidRouteError",
    "DIError",
    "ProviderNotFoundError",
    "RegistrationError",
]
