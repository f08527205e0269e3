"""Test environment: in-memory SQLite, fixed signing secret, cheap bcrypt rounds.

Set before any acquisitions module is imported, since settings are cached at import.
"""

import os

os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-signing-secret-0123456789abcdef"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("LOG_LEVEL", "WARNING")
