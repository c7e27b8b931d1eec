"""Public package surface for gridpick.

Exports ``main`` for programmatic CLI invocation and ``pick`` for embedding
the multi-column picker in other tools.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


def pick(*args, **kwargs):
    """Run the interactive picker and return the selected paths (or ``None``)."""
    from .loop import run_picker

    return run_picker(*args, **kwargs)


__all__ = ["main", "pick"]
