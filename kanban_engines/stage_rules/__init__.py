"""Disallowed stage transition registry and validator."""
