"""Test package. Points settings at in-memory SQLite before anything imports the app."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_WORK_FACTOR"] = "4"
os.environ.pop("JWT_EXPIRE_MINUTES", None)
os.environ.pop("API_PREFIX", None)
