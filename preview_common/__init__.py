"""Shared enums and data models for the markdown preview services."""
