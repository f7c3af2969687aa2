"""Internal collaborators for parsing and module resolution."""
