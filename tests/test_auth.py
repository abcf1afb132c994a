# tests/test_auth.py

from __future__ import annotations

from datetime import timedelta
from uuid import uuid4

import pytest
from fastapi import HTTPException

from app import config
from app.middleware.auth import get_current_user_id, get_user_id_from_payload, verify_token

from .conftest import make_token


@pytest.mark.asyncio
async def test_valid_token_yields_subject() -> None:
    user_id = str(uuid4())

    assert await get_current_user_id(f"Bearer {make_token(user_id)}") == user_id


@pytest.mark.asyncio
async def test_expired_token_is_rejected() -> None:
    token = make_token(str(uuid4()), expires_in=timedelta(seconds=-30))

    with pytest.raises(HTTPException) as exc_info:
        await verify_token(token)

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Token has expired"


@pytest.mark.asyncio
async def test_wrong_audience_is_rejected() -> None:
    token = make_token(str(uuid4()), audience="anon")

    with pytest.raises(HTTPException) as exc_info:
        await verify_token(token)

    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_token_signed_with_other_secret_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    token = make_token(str(uuid4()))
    monkeypatch.setattr(config, "SUPABASE_JWT_SECRET", "a-different-secret")

    with pytest.raises(HTTPException) as exc_info:
        await verify_token(token)

    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize("header", [None, "", "Bearer", "Token abc.def.ghi"])
async def test_malformed_authorization_header(header) -> None:
    with pytest.raises(HTTPException) as exc_info:
        await get_current_user_id(header)

    assert exc_info.value.status_code == 401


def test_subject_must_be_a_uuid() -> None:
    with pytest.raises(HTTPException) as exc_info:
        get_user_id_from_payload({"sub": "user-42"})
    assert exc_info.value.detail == "Invalid token: malformed user ID"

    with pytest.raises(HTTPException):
        get_user_id_from_payload({})

    user_id = uuid4()
    assert get_user_id_from_payload({"sub": str(user_id).upper()}) == str(user_id)
