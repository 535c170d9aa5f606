"""Convenience re-exports for the LIRC dispatch library."""

from . import lirc as _lirc
from .lirc import *  # noqa: F401,F403

__all__ = getattr(_lirc, "__all__", [])
