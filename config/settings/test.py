"""
Test settings.

Uses a file-backed SQLite database so that worker threads in the concurrency
tests share the same data. IMMEDIATE transactions make every atomic block take
the write lock at BEGIN, which serializes concurrent sales on SQLite.
"""

from .base import *  # noqa: F403,F405

ENVIRONMENT = "test"

SECRET_KEY = "test-secret-key-not-for-production"

DEBUG = False

ALLOWED_HOSTS = ["testserver", "localhost"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "pos_backend.sqlite3",  # noqa: F405
        "ATOMIC_REQUESTS": False,
        "OPTIONS": {
            "timeout": 30,
            "transaction_mode": "IMMEDIATE",
        },
        "TEST": {
            "NAME": str(BASE_DIR / "test_pos_backend.sqlite3"),  # noqa: F405
        },
    }
}

# Fast hashing for tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {
            "level": "WARNING",
            "class": "logging.StreamHandler",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
}
