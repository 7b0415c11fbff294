"""Test environment: in-memory SQLite, a fixed JWT secret and cheap bcrypt rounds.

Set before any schoolhub module is imported, since settings and the engine are
built at import time.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["APP_ENV"] = "dev"
