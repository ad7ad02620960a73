import os

# mentorhub.core.config builds its Settings on first import, and pytest
# imports this module before any test module
os.environ.update(
    {
        "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
        "JWT_SECRET": "test-secret",
        "APP_ENV": "test",
    }
)
