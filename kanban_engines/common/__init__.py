"""Shared errors, validation and transport helpers."""
