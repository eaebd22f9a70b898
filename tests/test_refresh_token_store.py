"""Tests for the refresh token store adapter."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from services.user.token import refresh_token_store


async def test_created_record_is_retrievable_by_token(session_factory, student_user):
    now = datetime.now(timezone.utc)
    async with session_factory() as db:
        created = await refresh_token_store.create(
            db,
            token="opaque-token-1",
            jwt_id="jti-1",
            user_id=student_user.user_id,
            created_at=now,
            expires_at=now + timedelta(days=180),
        )

    assert created.refresh_token_id is not None

    async with session_factory() as db:
        found = await refresh_token_store.find_by_token(db, "opaque-token-1")

    assert found is not None
    assert found.refresh_token_id == created.refresh_token_id
    assert found.jwt_id == "jti-1"
    assert found.user_id == student_user.user_id
    assert found.is_revoked is False
    assert not found.is_expired(now)


async def test_unknown_token_returns_none(session_factory):
    async with session_factory() as db:
        assert await refresh_token_store.find_by_token(db, "does-not-exist") is None


async def test_token_strings_are_unique(session_factory, student_user):
    now = datetime.now(timezone.utc)
    record = dict(
        token="duplicate",
        jwt_id="jti",
        user_id=student_user.user_id,
        created_at=now,
        expires_at=now + timedelta(days=1),
    )
    async with session_factory() as db:
        await refresh_token_store.create(db, **record)

    async with session_factory() as db:
        with pytest.raises(IntegrityError):
            await refresh_token_store.create(db, **record)


async def test_expiry_is_evaluated_against_the_given_instant(session_factory, student_user):
    now = datetime.now(timezone.utc)
    async with session_factory() as db:
        await refresh_token_store.create(
            db,
            token="short-lived",
            jwt_id="jti",
            user_id=student_user.user_id,
            created_at=now,
            expires_at=now + timedelta(hours=1),
        )

    async with session_factory() as db:
        found = await refresh_token_store.find_by_token(db, "short-lived")

    assert not found.is_expired(now + timedelta(hours=1))
    assert found.is_expired(now + timedelta(hours=1, seconds=1))
