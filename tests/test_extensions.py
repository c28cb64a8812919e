"""Tests for configuration helpers and Firebase initialisation."""

import pytest

from sams_admin import config, extensions


class TestRequire:
    def test_returns_value(self) -> None:
        assert config.require("abc", "SAMS_INSPECT_UID") == "abc"

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_raises(self, value) -> None:
        with pytest.raises(config.ConfigError) as exc:
            config.require(value, "SAMS_INSPECT_UID")
        assert "SAMS_INSPECT_UID" in exc.value.message


@pytest.fixture
def firebase(monkeypatch):
    """Record initialize_app calls instead of contacting Google."""
    calls = []
    monkeypatch.setattr(extensions.firebase_admin, "_apps", {})
    monkeypatch.setattr(extensions.firebase_admin, "initialize_app", lambda *args: calls.append(args))
    monkeypatch.setattr(extensions.credentials, "Certificate", lambda path: ("cert", path))
    monkeypatch.setattr(extensions, "_db", None)
    return calls


class TestInitFirebase:
    def test_prefers_application_credentials(self, firebase, monkeypatch, tmp_path) -> None:
        key = tmp_path / "gac.json"
        key.write_text("{}")
        monkeypatch.setattr(extensions, "GOOGLE_APPLICATION_CREDENTIALS", str(key))

        extensions.init_firebase()
        assert firebase == [(("cert", str(key)),)]

    def test_falls_back_to_local_key_file(self, firebase, monkeypatch, tmp_path) -> None:
        (tmp_path / "serviceAccountKey.json").write_text("{}")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(extensions, "GOOGLE_APPLICATION_CREDENTIALS", None)
        monkeypatch.setattr(extensions, "SERVICE_ACCOUNT_PATH", "serviceAccountKey.json")

        extensions.init_firebase()
        assert firebase == [(("cert", str(tmp_path / "serviceAccountKey.json")),)]

    def test_last_resort_is_adc(self, firebase, monkeypatch, tmp_path) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(extensions, "GOOGLE_APPLICATION_CREDENTIALS", None)
        monkeypatch.setattr(extensions, "SERVICE_ACCOUNT_PATH", "missing.json")

        extensions.init_firebase()
        assert firebase == [()]

    def test_already_initialised(self, firebase, monkeypatch) -> None:
        monkeypatch.setattr(extensions.firebase_admin, "_apps", {"[DEFAULT]": object()})
        extensions.init_firebase()
        assert firebase == []


class TestGetDb:
    def test_singleton(self, firebase, monkeypatch) -> None:
        clients = []
        monkeypatch.setattr(extensions, "init_firebase", lambda: None)
        monkeypatch.setattr(extensions.firestore, "client", lambda: clients.append(object()) or clients[-1])

        first = extensions.get_db()
        assert extensions.get_db() is first
        assert len(clients) == 1
