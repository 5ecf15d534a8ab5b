"""Request boundary, configuration and errors for the dashboard."""
