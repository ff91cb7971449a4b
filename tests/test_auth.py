from types import SimpleNamespace

import pytest

from app.dependencies.auth import AuthenticationRequired, get_authenticated_member, sign_in_url


def _request(session, path="/directory/join/2"):
    return SimpleNamespace(session=session, url=SimpleNamespace(path=path))


def test_session_member_id_returned():
    assert get_authenticated_member(_request({"user_id": 42})) == 42


def test_numeric_string_member_id_coerced():
    assert get_authenticated_member(_request({"user_id": "42"})) == 42


def test_missing_session_member_raises_with_origin_path():
    with pytest.raises(AuthenticationRequired) as excinfo:
        get_authenticated_member(_request({}, path="/directory/join/2"))

    assert excinfo.value.redirect_to == "/directory/join/2"


def test_malformed_session_member_is_cleared():
    session = {"user_id": "not-a-number"}

    with pytest.raises(AuthenticationRequired):
        get_authenticated_member(_request(session))

    assert "user_id" not in session


@pytest.mark.parametrize("redirect_to,expected", [
    ("/directory/join/2", "/login?redirect=/directory/join/2"),
    ("",                  "/login?redirect=/"),
    ("/a b",              "/login?redirect=/a%20b"),
])
def test_sign_in_url(redirect_to, expected):
    assert sign_in_url("/login", redirect_to) == expected
