"""Single-invocation publish worker.

Runs one publish job identified by the process configuration.
"""

from __future__ import annotations

from typing import Any


def __getattr__(name: str) -> Any:
    if name == "main":
        from .handler import main as loaded_main

        return loaded_main
    raise AttributeError(name)


__all__ = ["main"]
