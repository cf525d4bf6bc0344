"""Database Infrastructure — SQLAlchemy declarative Base and session factory helpers."""
