"""Task list module: pure collection transitions, projection, persistence and the view."""
