"""Markdown Preview Editor Service."""
