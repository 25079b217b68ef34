"""Board configuration holder."""
