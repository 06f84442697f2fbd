"""Server-rendered dashboard for managing links."""
