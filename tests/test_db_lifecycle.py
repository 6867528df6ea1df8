"""Tests for database initialization and lifecycle management.

Covers:
  - Missing data directory created automatically
  - DB file created and opened on first run
  - APP_DB_PATH used exactly as configured
  - Unreachable database → controlled error that aborts startup
"""

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
from blog_backend.app.core.settings import Settings
from blog_backend.app.db.engine import DatabaseInitError, get_resolved_db_path, init_db
from sqlalchemy import create_engine, text

# ---------------------------------------------------------------------------
# Missing directory created automatically
# ---------------------------------------------------------------------------


class TestDirectoryCreation:
    def test_parent_dir_created_for_new_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = os.path.join(tmpdir, "new", "nested", "app.db")
            Settings(
                app_db_path=db_path,
                _env_file=None,  # type: ignore[call-arg]
            )
            assert Path(db_path).parent.exists()

    def test_existing_dir_no_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = os.path.join(tmpdir, "app.db")
            s = Settings(
                app_db_path=db_path,
                _env_file=None,  # type: ignore[call-arg]
            )
            assert s.app_db_path == db_path


# ---------------------------------------------------------------------------
# DB file created and opened successfully
# ---------------------------------------------------------------------------


class TestDbFileCreation:
    def test_sqlite_creates_file_on_connect(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = os.path.join(tmpdir, "test.db")
            eng = create_engine(
                f"sqlite:///{db_path}",
                connect_args={"check_same_thread": False},
            )
            with eng.connect() as conn:
                conn.execute(text("SELECT 1"))
            eng.dispose()
            assert Path(db_path).exists()

    def test_init_db_succeeds(self) -> None:
        init_db()  # should not raise


# ---------------------------------------------------------------------------
# APP_DB_PATH used exactly as configured
# ---------------------------------------------------------------------------


class TestDbPathHonored:
    def test_custom_path_used(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            custom = os.path.join(tmpdir, "custom.db")
            s = Settings(
                app_db_path=custom,
                _env_file=None,  # type: ignore[call-arg]
            )
            assert s.app_db_path == custom
            assert s.database_url == f"sqlite:///{custom}"

    def test_resolved_path_is_absolute(self) -> None:
        assert get_resolved_db_path().is_absolute()

    def test_engine_uses_settings_path(self) -> None:
        from blog_backend.app.core.settings import settings

        assert get_resolved_db_path() == Path(settings.app_db_path).resolve()


# ---------------------------------------------------------------------------
# Unreachable database → controlled error
# ---------------------------------------------------------------------------


class TestDbInitError:
    def test_init_db_failure_raises_database_init_error(self) -> None:
        with patch(
            "blog_backend.app.db.engine.engine.connect",
            side_effect=Exception("cannot open"),
        ):
            with pytest.raises(DatabaseInitError, match="APP_DB_PATH"):
                init_db()

    def test_init_error_message_is_actionable(self) -> None:
        with patch(
            "blog_backend.app.db.engine.engine.connect",
            side_effect=Exception("permission denied"),
        ):
            with pytest.raises(DatabaseInitError) as exc_info:
                init_db()
            assert "writable location" in str(exc_info.value)
            assert "permission denied" in str(exc_info.value)

    def test_startup_aborts_when_store_unreachable(self) -> None:
        from blog_backend.app.main import app
        from fastapi.testclient import TestClient

        with patch(
            "blog_backend.app.db.engine.engine.connect",
            side_effect=Exception("cannot open"),
        ):
            with pytest.raises(DatabaseInitError), TestClient(app):
                pass
