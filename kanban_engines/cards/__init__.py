"""Kanban card registry."""
