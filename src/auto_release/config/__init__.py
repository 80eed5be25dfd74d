"""Configuration management for auto-release."""

from __future__ import annotations

from auto_release.config.loader import load_config
from auto_release.config.models import AutoReleaseConfig, ChangelogConfig, LabelsConfig

__all__ = [
    "AutoReleaseConfig",
    "ChangelogConfig",
    "LabelsConfig",
    "load_config",
]
