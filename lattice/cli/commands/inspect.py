"""Wiring inspection commands.

Loads a ``Wiring`` from a ``module:attribute`` target and reports its
route table and container registrations.
"""

import importlib
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

import click

from ...bootstrap import Wiring
from ..utils.colors import (
    success, warning, dim, section, kv, table,
    _CHECK, _CROSS,
)


def load_wiring(target: str) -> Wiring:
    """
    Import ``module:attribute`` and return the wiring it names.

    The attribute may be a ``Wiring`` or a zero-argument callable
    returning one.

    Raises:
        click.BadParameter: If the target cannot be loaded
    """
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise click.BadParameter(
            f"expected 'module:attribute', got {target!r}", param_hint="TARGET"
        )

    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import {module_name!r}: {e}", param_hint="TARGET") from e

    obj = module
    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise click.BadParameter(
                f"{module_name!r} has no attribute {attribute!r}", param_hint="TARGET"
            ) from e

    if not isinstance(obj, Wiring) and callable(obj):
        obj = obj()

    if not isinstance(obj, Wiring):
        raise click.BadParameter(
            f"{target!r} is not a Wiring (got {type(obj).__name__})", param_hint="TARGET"
        )
    return obj


def inspect_routes(wiring: Wiring, *, as_json: bool = False, check: bool = False) -> int:
    """
    Print the route table.

    Returns:
        Exit code: 1 when ``check`` is set and collisions exist, else 0
    """
    routes = wiring.routes()
    collisions = wiring.collisions() if check else {}

    if as_json:
        payload: Dict[str, Any] = {
            "routes": [r.to_dict() for r in routes],
            "total": len(routes),
        }
        if check:
            payload["collisions"] = [
                {"method": method, "path": path, "handlers": [r.handler_name for r in group]}
                for (method, path), group in collisions.items()
            ]
        click.echo(json.dumps(payload, indent=2))
        return 1 if collisions else 0

    section("Routes")
    if not routes:
        dim("  No routes registered.")
    else:
        table(
            ["Method", "Path", "Handler"],
            [[r.method, r.full_path, r.handler_name] for r in routes],
        )
    click.echo()
    kv("Total", str(len(routes)))

    if check:
        if collisions:
            for (method, path), group in collisions.items():
                handlers = ", ".join(r.handler_name for r in group)
                warning(f"  {_CROSS} {method} {path} is claimed by {handlers}")
            return 1
        success(f"  {_CHECK} No route collisions")
    return 0


def inspect_providers(wiring: Wiring, *, as_json: bool = False) -> None:
    """Print registered keys and the dependency map."""
    container = wiring.container
    keys = container.keys()
    dependencies = container.dependency_map()

    if as_json:
        click.echo(json.dumps({
            "providers": keys,
            "controllers": list(wiring.controllers),
            "dependencies": dependencies,
        }, indent=2))
        return

    section("Providers")
    rows: List[List[str]] = []
    for key in keys:
        role = "controller" if key in wiring.controllers else "service"
        rows.append([key, role])
    if rows:
        table(["Key", "Role"], rows)
    else:
        dim("  No providers registered.")

    click.echo()
    section("Dependencies")
    dep_rows = [
        [f"{owner}.{attribute}", key]
        for owner, deps in dependencies.items()
        for attribute, key in deps.items()
    ]
    if dep_rows:
        table(["Property", "Key"], dep_rows)
    else:
        dim("  No property dependencies declared.")
