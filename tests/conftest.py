"""Pytest configuration: ensure env vars and import path are set early.

This runs before any tests, so modules can import without local path hacks.
Also load .env before setting defaults so real settings are used when present.
"""
from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

from dotenv import load_dotenv

# Ensure repository root is on sys.path for local package imports
sys.path.append(str(Path(__file__).resolve().parents[1]))

load_dotenv(override=False)

# Keep the TinyDB file and logs out of the working tree during test runs.
_TEST_DATA_DIR = Path(tempfile.mkdtemp(prefix="reading-plan-tests-"))
os.environ.setdefault("DATA_DIR", str(_TEST_DATA_DIR))
os.environ.setdefault("READING_PLAN_LOG_DIR", str(_TEST_DATA_DIR / "logs"))
os.environ.setdefault("DEFAULT_BIBLE_VERSION", "nvi")
os.environ.setdefault("ADMIN_API_TOKEN", "test-admin")
os.environ.setdefault("HEALTHCHECK_API_TOKEN", "test-health")
