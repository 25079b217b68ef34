"""Key-ordered record stores."""
