# conftest.py
"""
Shared pytest fixtures.

Firebase is never contacted: firebase_admin is marked as initialised,
firestore.client() / storage.bucket() return MagicMocks, and the route tests
swap every service on app.services for a MagicMock.
"""
from unittest.mock import MagicMock, patch

import firebase_admin
import pytest

from scream_backend import create_app

TEST_USER = {"handle": "alice", "user_id": "uid-alice", "image_url": "https://img/alice.png"}


def make_doc(doc_id, data=None, exists=True):
    """Fake Firestore DocumentSnapshot."""
    doc = MagicMock()
    doc.id = doc_id
    doc.exists = exists
    doc.to_dict.return_value = dict(data) if data is not None else None
    doc.reference = MagicMock(name=f"ref:{doc_id}")
    return doc


@pytest.fixture
def mock_db(monkeypatch):
    """Firestore client returned by firestore.client() while the test runs."""
    db = MagicMock(name="firestore_client")
    monkeypatch.setattr(firebase_admin, "_apps", {"[DEFAULT]": object()})
    with patch("firebase_admin.firestore.client", return_value=db), \
            patch("firebase_admin.storage.bucket", return_value=MagicMock(name="bucket")):
        yield db


@pytest.fixture
def app(mock_db):
    app = create_app('testing')
    for name in ('screams', 'users', 'notifications', 'auth', 'reactions', 'storage'):
        app.services[name] = MagicMock(name=f"{name}_service")
    app.services['users'].get_user_by_uid.return_value = dict(TEST_USER)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers():
    """Authorization header accepted by fb_auth_required for TEST_USER."""
    with patch("firebase_admin.auth.verify_id_token", return_value={"uid": TEST_USER["user_id"]}):
        yield {"Authorization": "Bearer valid-token"}


@pytest.fixture
def collections(mock_db):
    """One MagicMock per collection name, so db.collection('a') and db.collection('b') differ."""
    refs = {}

    def collection(name):
        if name not in refs:
            refs[name] = MagicMock(name=f"collection:{name}")
        return refs[name]

    mock_db.collection.side_effect = collection
    return refs


@pytest.fixture
def no_transaction_retry():
    """Run @firestore.transactional bodies directly with the mocked transaction."""
    with patch("firebase_admin.firestore.transactional", new=lambda fn: fn):
        yield
