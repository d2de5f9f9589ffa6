"""Infrastructure layer — file discovery, the corpus loader, templates."""
