"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or reuse a real signing key
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-hs256-signing-000")
