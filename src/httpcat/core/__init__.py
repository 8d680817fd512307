"""Test runner built on the protocol stack."""

from .once import once, write_once

__all__ = ["once", "write_once"]
