"""
Lattice CLI.

Inspect the wiring produced by a bootstrap pass without running an
application.

Usage:
    lattice routes myapp.wiring:wiring
    lattice routes myapp.wiring:build --json
    lattice routes myapp.wiring:build --check
    lattice providers myapp.wiring:build
"""

__cli_name__ = "lattice"


def main():
    """Wrapper to avoid eager import of __main__ which causes warnings with -m."""
    from .__main__ import main as _main
    return _main()
