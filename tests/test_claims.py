"""Unit tests for the access token claim builder."""

from core.security.claims import build_claims
from models.user import User


def _user():
    return User(user_id=7, username="jane", email="jane@example.com", hashed_password="x")


def test_claims_carry_identity_and_email_subject():
    claims = build_claims(_user(), ["Student"])

    assert claims.name == "jane"
    assert claims.nameid == "7"
    assert claims.email == "jane@example.com"
    assert claims.sub == "jane@example.com"
    assert claims.roles == ["Student"]


def test_roles_keep_order_and_duplicates():
    claims = build_claims(_user(), ["Student", "Manager", "Student"])

    assert claims.roles == ["Student", "Manager", "Student"]


def test_user_without_roles_gets_empty_role_list():
    assert build_claims(_user(), []).roles == []


def test_each_call_allocates_a_new_jti():
    user = _user()
    first = build_claims(user, [])
    second = build_claims(user, [])

    assert first.jti != second.jti
    assert first.model_dump(exclude={"jti"}) == second.model_dump(exclude={"jti"})
