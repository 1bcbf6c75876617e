"""
Test settings are applied before any project module reads config.settings.
Run from project root: python -m pytest tests -v
Or: python -m unittest discover -s tests -t . -v
"""
import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="onboarding-uploads-"))
os.environ.setdefault("JWT_SECRET", "test-secret")
