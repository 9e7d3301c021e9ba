"""Configuration utilities for the preview services."""

from .base_settings import ServiceSettingsBase

__all__ = ["ServiceSettingsBase"]
