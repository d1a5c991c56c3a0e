"""Search sessions driven by the editor prompt."""

from .session import SearchSession

__all__ = ["SearchSession"]
