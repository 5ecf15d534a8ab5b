"""SQLite storage for posts and daily metrics."""
