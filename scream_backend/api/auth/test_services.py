# scream_backend/api/auth/test_services.py
from unittest.mock import MagicMock, patch

import pytest
from firebase_admin import auth as firebase_auth
from google.api_core.exceptions import AlreadyExists

from conftest import make_doc
from scream_backend.api.auth.services import AuthService, HandleTakenError, EmailInUseError


@pytest.fixture
def flask_app():
    app = MagicMock()
    app.config = {
        'FIREBASE_WEB_API_KEY': 'key',
        'IDENTITY_TOOLKIT_URL': 'https://identity.example',
        'NO_IMAGE_FILENAME': 'no-image.jpeg',
    }
    return app


@pytest.fixture
def storage():
    storage = MagicMock()
    storage.download_url.return_value = "https://storage/no-image.jpeg"
    return storage


@pytest.fixture
def service(collections, flask_app, storage):
    service = AuthService(storage_service=storage)
    service.init_app(flask_app)
    return service


def test_signup_creates_account_and_user_document(service, collections, storage):
    collections['users'].document.return_value.get.return_value = make_doc("newbie", exists=False)

    with patch("firebase_admin.auth.create_user", return_value=MagicMock(uid="uid-1")) as create_user, \
            patch("scream_backend.api.auth.services.FirebaseAuthService.sign_in_with_password",
                  return_value="id-token") as sign_in:
        token = service.signup("new@example.com", "secret", "newbie")

    assert token == "id-token"
    create_user.assert_called_once_with(email="new@example.com", password="secret")
    sign_in.assert_called_once_with("new@example.com", "secret", api_key="key", url="https://identity.example")
    collections['users'].document.assert_called_with("newbie")
    stored = collections['users'].document.return_value.create.call_args[0][0]
    assert stored["user_id"] == "uid-1"
    assert stored["handle"] == "newbie"
    assert stored["image_url"] == "https://storage/no-image.jpeg"
    storage.download_url.assert_called_once_with("no-image.jpeg")


def test_signup_handle_taken(service, collections):
    collections['users'].document.return_value.get.return_value = make_doc("newbie", {"handle": "newbie"})

    with patch("firebase_admin.auth.create_user") as create_user:
        with pytest.raises(HandleTakenError):
            service.signup("new@example.com", "secret", "newbie")

    create_user.assert_not_called()


def test_signup_email_in_use(service, collections):
    collections['users'].document.return_value.get.return_value = make_doc("newbie", exists=False)

    with patch("firebase_admin.auth.create_user",
               side_effect=firebase_auth.EmailAlreadyExistsError("exists", None, None)):
        with pytest.raises(EmailInUseError):
            service.signup("new@example.com", "secret", "newbie")

    collections['users'].document.return_value.create.assert_not_called()


def test_signup_handle_claimed_concurrently_rolls_back_account(service, collections):
    user_ref = collections['users'].document.return_value
    user_ref.get.return_value = make_doc("newbie", exists=False)
    user_ref.create.side_effect = AlreadyExists("Document already exists")

    with patch("firebase_admin.auth.create_user", return_value=MagicMock(uid="uid-2")), \
            patch("firebase_admin.auth.delete_user") as delete_user, \
            patch("scream_backend.api.auth.services.FirebaseAuthService.sign_in_with_password") as sign_in:
        with pytest.raises(HandleTakenError):
            service.signup("late@example.com", "secret", "newbie")

    delete_user.assert_called_once_with("uid-2")
    user_ref.set.assert_not_called()
    sign_in.assert_not_called()


def test_login_signs_in(service):
    with patch("scream_backend.api.auth.services.FirebaseAuthService.sign_in_with_password",
               return_value="id-token"):
        assert service.login("a@b.com", "pw") == "id-token"
