"""Root conftest: shared test configuration."""

import os

# Tests never touch a real database or a .env file's clock settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DATABASE_AUTO_CREATE", "false")
os.environ.setdefault("LOG_FORMAT", "text")
