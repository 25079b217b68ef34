"""Kanban stage workflow engines."""
