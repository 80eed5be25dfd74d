"""auto-release: label-driven version bumps and Keep a Changelog updates."""

from __future__ import annotations

__version__ = "0.1.0"
