"""Pytest fixtures for sams_admin.

Every test runs against tests.fakes.FakeFirestore; nothing here talks to a
real project or needs a service account.
"""

import pytest

from tests.fakes import FakeFirestore

UID = "Xk3pQ9rLm2VbT7wYc1NsHd4Ef8Ga"
EMAIL = "owner@example.com"


@pytest.fixture
def db() -> FakeFirestore:
    return FakeFirestore()


@pytest.fixture
def use_db(monkeypatch):
    """Point a script module's get_db() at the given fake."""

    def _use(module, fake: FakeFirestore) -> FakeFirestore:
        monkeypatch.setattr(module, "get_db", lambda: fake)
        monkeypatch.setattr(module, "configure_logging", lambda *a, **kw: None)
        return fake

    return _use
