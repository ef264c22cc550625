"""A Flask JSON web service for users, posts and comments stored in SQLite."""

__version__ = "0.1.0"