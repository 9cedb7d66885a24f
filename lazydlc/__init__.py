"""Public package surface for lazydlc.

Exports ``main`` for programmatic CLI invocation.
Catalog, archive and toggle-tree code lives in the subpackages.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
