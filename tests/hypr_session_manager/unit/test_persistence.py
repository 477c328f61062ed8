"""Unit tests for session persistence."""

import json

import pytest

from hypr_session_manager.core.errors import SessionFileError
from hypr_session_manager.core.models import SessionData
from hypr_session_manager.core.persistence import SessionStore, validate_session_name


@pytest.fixture
def store(sessions_dir):
    return SessionStore(sessions_dir)


class TestSessionStore:
    """Tests for SessionStore."""

    def test_save_creates_directory_and_file(self, store, sessions_dir, sample_session):
        """Test saving writes <name>.json under a fresh directory."""
        path = store.save(sample_session, "work")

        assert path == sessions_dir / "work.json"
        data = json.loads(path.read_text())
        assert [w["class"] for w in data["windows"]] == ["firefox", "kitty", "kitty"]
        assert data["windows"][2]["floating"] is True

    def test_save_then_load(self, store, sample_session):
        """Test a saved session loads back unchanged."""
        store.save(sample_session)

        loaded = store.load()

        assert loaded == sample_session

    def test_load_missing_returns_none(self, store):
        assert store.load("nope") is None

    def test_load_corrupt_file_raises(self, store, sessions_dir):
        """Test unreadable JSON raises SessionFileError."""
        sessions_dir.mkdir(parents=True)
        (sessions_dir / "broken.json").write_text("{not json")

        with pytest.raises(SessionFileError, match="broken.json"):
            store.load("broken")

    def test_load_invalid_records_raises(self, store, sessions_dir):
        """Test a well-formed file with bad window records raises."""
        sessions_dir.mkdir(parents=True)
        (sessions_dir / "bad.json").write_text(json.dumps({"windows": [{"address": "0x1"}]}))

        with pytest.raises(SessionFileError):
            store.load("bad")

    def test_list_sessions_sorted(self, store, sample_session):
        """Test saved sessions are listed by name."""
        for name in ("zeta", "alpha", "mid"):
            store.save(sample_session, name)
        store.write_rules(sample_session, "alpha")

        assert store.list_sessions() == ["alpha", "mid", "zeta"]

    def test_list_sessions_without_directory(self, store):
        assert store.list_sessions() == []

    def test_delete_removes_session_and_rules(self, store, sessions_dir, sample_session):
        """Test deleting a session also removes its generated rules."""
        store.save(sample_session, "work")
        store.write_rules(sample_session, "work")

        assert store.delete("work") is True
        assert not (sessions_dir / "work.json").exists()
        assert not (sessions_dir / "work.conf").exists()

    def test_delete_missing(self, store):
        assert store.delete("ghost") is False

    def test_write_rules(self, store, sessions_dir, sample_session):
        """Test rules land next to the session file."""
        path = store.write_rules(sample_session, "work")

        assert path == sessions_dir / "work.conf"
        assert "windowrule = move 10 40,^firefox$" in path.read_text()

    def test_empty_session_round_trip(self, store):
        """Test an empty capture is still a valid session."""
        store.save(SessionData())

        assert store.load().is_empty


class TestValidateSessionName:
    """Tests for validate_session_name."""

    @pytest.mark.parametrize("name", ["active", "work-2", "my_layout"])
    def test_valid(self, name):
        validate_session_name(name)

    @pytest.mark.parametrize("name", ["", "../etc", "a b", "x/y"])
    def test_invalid(self, name):
        with pytest.raises(SessionFileError):
            validate_session_name(name)
