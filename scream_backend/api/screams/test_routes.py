# scream_backend/api/screams/test_routes.py
from datetime import datetime, timezone

from scream_backend.api.screams.services import AlreadyLikedError, NotLikedError, InvalidCursorError

CREATED = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


def _scream(**overrides):
    scream = {
        "scream_id": "s1", "body": "first scream", "user_handle": "bob",
        "user_image": "https://img/bob.png", "created_at": CREATED,
        "like_count": 2, "comment_count": 1
    }
    scream.update(overrides)
    return scream


def test_get_all_screams_uses_camel_case(client, app):
    app.services['screams'].get_screams.return_value = ([_scream()], None)

    response = client.get('/api/screams')

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["nextCursor"] is None
    assert payload["screams"][0] == {
        "screamId": "s1", "body": "first scream", "userHandle": "bob",
        "userImage": "https://img/bob.png", "createdAt": "2024-01-15T10:30:00+00:00",
        "likeCount": 2, "commentCount": 1
    }
    app.services['screams'].get_screams.assert_called_once_with(None, None)


def test_get_all_screams_paging_args(client, app):
    app.services['screams'].get_screams.return_value = ([], None)
    response = client.get('/api/screams?limit=5&cursor=s9')
    assert response.status_code == 200
    app.services['screams'].get_screams.assert_called_once_with(5, "s9")


def test_get_all_screams_cursor_without_limit_uses_page_size(client, app):
    app.services['screams'].get_screams.return_value = ([_scream()], "s1")

    response = client.get('/api/screams?cursor=s9')

    assert response.status_code == 200
    assert response.get_json()["nextCursor"] == "s1"
    app.services['screams'].get_screams.assert_called_once_with(20, "s9")


def test_get_all_screams_unknown_cursor(client, app):
    app.services['screams'].get_screams.side_effect = InvalidCursorError("Unknown cursor: gone")
    response = client.get('/api/screams?cursor=gone')
    assert response.status_code == 400
    assert response.get_json()["error_code"] == "INVALID_CURSOR"


def test_get_all_screams_rejects_bad_limit(client):
    response = client.get('/api/screams?limit=0')
    assert response.status_code == 400
    assert response.get_json()["error_code"] == "VALIDATION_ERROR"


def test_post_scream_validation(client, app, auth_headers):
    response = client.post('/api/screams', json={"body": "  "}, headers=auth_headers)
    assert response.status_code == 400
    assert response.get_json()["details"] == {"body": ["Must not be empty"]}
    app.services['screams'].create_scream.assert_not_called()


def test_post_scream_without_json_body(client, auth_headers):
    response = client.post('/api/screams', data="not json", headers=auth_headers)
    assert response.status_code == 400


def test_get_scream_with_comments(client, app):
    comment = {"comment_id": "c1", "scream_id": "s1", "body": "nice", "user_handle": "alice",
               "user_image": None, "created_at": CREATED}
    app.services['screams'].get_scream.return_value = _scream(comments=[comment])

    response = client.get('/api/screams/s1')

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["screamId"] == "s1"
    assert payload["comments"][0]["commentId"] == "c1"
    assert payload["comments"][0]["userHandle"] == "alice"


def test_get_scream_not_found(client, app):
    app.services['screams'].get_scream.return_value = None
    response = client.get('/api/screams/missing')
    assert response.status_code == 404
    assert response.get_json()["error_code"] == "SCREAM_NOT_FOUND"


def test_delete_scream(client, app, auth_headers):
    response = client.delete('/api/screams/s1', headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json() == {"message": "Scream deleted successfully"}
    app.services['screams'].delete_scream.assert_called_once_with("s1", "alice")


def test_delete_scream_of_someone_else(client, app, auth_headers):
    app.services['screams'].delete_scream.side_effect = PermissionError("Unauthorized")
    response = client.delete('/api/screams/s1', headers=auth_headers)
    assert response.status_code == 403


def test_delete_missing_scream(client, app, auth_headers):
    app.services['screams'].delete_scream.side_effect = ValueError("Scream not found")
    response = client.delete('/api/screams/s1', headers=auth_headers)
    assert response.status_code == 404


def test_like_scream(client, app, auth_headers):
    app.services['screams'].like_scream.return_value = _scream(like_count=3)
    response = client.get('/api/screams/s1/like', headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json()["likeCount"] == 3
    app.services['screams'].like_scream.assert_called_once_with("s1", "alice")


def test_like_scream_twice(client, app, auth_headers):
    app.services['screams'].like_scream.side_effect = AlreadyLikedError("Scream already liked")
    response = client.get('/api/screams/s1/like', headers=auth_headers)
    assert response.status_code == 400
    assert response.get_json()["error_code"] == "ALREADY_LIKED"


def test_like_missing_scream(client, app, auth_headers):
    app.services['screams'].like_scream.side_effect = ValueError("Scream not found")
    response = client.get('/api/screams/s1/like', headers=auth_headers)
    assert response.status_code == 404


def test_unlike_scream_not_liked(client, app, auth_headers):
    app.services['screams'].unlike_scream.side_effect = NotLikedError("Scream not liked")
    response = client.get('/api/screams/s1/unlike', headers=auth_headers)
    assert response.status_code == 400
    assert response.get_json()["error_code"] == "NOT_LIKED"


def test_unlike_scream(client, app, auth_headers):
    app.services['screams'].unlike_scream.return_value = _scream(like_count=1)
    response = client.get('/api/screams/s1/unlike', headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json()["likeCount"] == 1


def test_comment_on_scream(client, app, auth_headers):
    app.services['screams'].comment_on_scream.return_value = {
        "comment_id": "c1", "scream_id": "s1", "body": "nice", "user_handle": "alice",
        "user_image": "https://img/alice.png", "created_at": CREATED
    }
    response = client.post('/api/screams/s1/comment', json={"body": "nice"}, headers=auth_headers)

    assert response.status_code == 201
    assert response.get_json()["screamId"] == "s1"
    app.services['screams'].comment_on_scream.assert_called_once_with(
        "s1", "alice", "https://img/alice.png", "nice"
    )


def test_comment_blank_body(client, app, auth_headers):
    response = client.post('/api/screams/s1/comment', json={"body": ""}, headers=auth_headers)
    assert response.status_code == 400
    app.services['screams'].comment_on_scream.assert_not_called()


def test_comment_on_missing_scream(client, app, auth_headers):
    app.services['screams'].comment_on_scream.side_effect = ValueError("Scream not found")
    response = client.post('/api/screams/s1/comment', json={"body": "hi"}, headers=auth_headers)
    assert response.status_code == 404
