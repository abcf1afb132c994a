"""
Supabase JWT Authentication

Verifies bearer tokens against the Supabase project's JWKS (ES256/RS256).
When SUPABASE_JWT_SECRET is configured, tokens are verified with that
shared HS256 secret instead (legacy Supabase projects, local development).
"""
import time
import logging
from typing import Optional
from uuid import UUID
from fastapi import HTTPException, Header
from jose import jwt, jwk
import httpx

from app import config

logger = logging.getLogger(__name__)

# JWKS cache
_jwks_cache: Optional[dict] = None
_jwks_cache_time: float = 0
JWKS_CACHE_DURATION = 60 * 60  # 1 hour in seconds

# JWT configuration
JWT_AUDIENCE = "authenticated"


def get_supabase_url() -> str:
    """Get Supabase URL from configuration"""
    url = config.SUPABASE_URL
    if not url:
        raise ValueError("SUPABASE_URL must be set")
    return url


def get_jwks_url() -> str:
    """Get JWKS URL from Supabase URL"""
    supabase_url = get_supabase_url()
    return f"{supabase_url}/auth/v1/.well-known/jwks.json"


def get_jwt_issuer() -> str:
    """Get JWT issuer from Supabase URL"""
    supabase_url = get_supabase_url()
    return f"{supabase_url}/auth/v1"


def reset_jwks_cache() -> None:
    global _jwks_cache, _jwks_cache_time
    _jwks_cache = None
    _jwks_cache_time = 0


async def get_jwks() -> dict:
    """
    Fetch and cache JWKS from Supabase
    Returns cached JWKS if available and not expired
    """
    global _jwks_cache, _jwks_cache_time

    now = time.time()

    if _jwks_cache and (now - _jwks_cache_time) < JWKS_CACHE_DURATION:
        return _jwks_cache

    jwks_url = get_jwks_url()
    logger.info(f"Fetching JWKS from Supabase: {jwks_url}")

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=10.0)
            response.raise_for_status()
            _jwks_cache = response.json()
            _jwks_cache_time = now
            logger.info("JWKS cached successfully")
            return _jwks_cache
    except Exception as e:
        logger.error(f"Failed to fetch JWKS: {e}")
        # If we have a cached version, use it even if expired
        if _jwks_cache:
            logger.warning("Using expired JWKS cache due to fetch failure")
            return _jwks_cache
        raise HTTPException(
            status_code=500,
            detail="Failed to fetch authentication keys"
        )


async def _decode_with_jwks(token: str) -> dict:
    jwks = await get_jwks()

    unverified_header = jwt.get_unverified_header(token)
    kid = unverified_header.get("kid")

    if not kid:
        raise HTTPException(
            status_code=401,
            detail="Token missing key ID (kid)"
        )

    key_data = None
    for jwk_key in jwks.get("keys", []):
        if jwk_key.get("kid") == kid:
            key_data = jwk_key
            break

    if not key_data:
        raise HTTPException(
            status_code=401,
            detail=f"Key with ID '{kid}' not found in JWKS"
        )

    key = jwk.construct(key_data)

    return jwt.decode(
        token,
        key,
        algorithms=["ES256", "RS256"],
        audience=JWT_AUDIENCE,
        issuer=get_jwt_issuer(),
    )


def _decode_with_secret(token: str, secret: str) -> dict:
    return jwt.decode(
        token,
        secret,
        algorithms=["HS256"],
        audience=JWT_AUDIENCE,
    )


async def verify_token(token: str) -> dict:
    """
    Verify a Supabase JWT token.

    Returns the decoded JWT payload
    Raises HTTPException if verification fails
    """
    try:
        secret = config.SUPABASE_JWT_SECRET
        if secret:
            return _decode_with_secret(token, secret)
        return await _decode_with_jwks(token)
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=401,
            detail="Token has expired"
        )
    except jwt.JWTClaimsError as e:
        raise HTTPException(
            status_code=401,
            detail=f"Token validation failed: {str(e)}"
        )
    except jwt.JWTError as e:
        raise HTTPException(
            status_code=401,
            detail=f"Invalid token: {str(e)}"
        )
    except HTTPException:
        raise
    except ValueError as e:
        logger.error(f"Configuration error: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail="Authentication is not properly configured"
        )
    except Exception as e:
        logger.error(f"Token verification error: {e}", exc_info=True)
        raise HTTPException(
            status_code=401,
            detail="Token verification failed"
        )


def get_user_id_from_payload(payload: dict) -> str:
    """
    Extract user ID from JWT payload
    Raises HTTPException if user ID is missing or not a UUID
    """
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=401,
            detail="Invalid token: no user ID"
        )
    try:
        return str(UUID(str(user_id)))
    except ValueError:
        logger.warning(f"Token 'sub' is not a UUID: {user_id}")
        raise HTTPException(
            status_code=401,
            detail="Invalid token: malformed user ID"
        )


async def get_current_user_id(
    authorization: Optional[str] = Header(None)
) -> str:
    """
    FastAPI dependency to extract and verify JWT token from Authorization header
    Returns the authenticated user ID
    """
    if not authorization:
        raise HTTPException(
            status_code=401,
            detail="Authorization header missing"
        )

    # Extract token from "Bearer <token>" format
    try:
        scheme, token = authorization.split(" ", 1)
    except ValueError:
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization header format. Expected 'Bearer <token>'"
        )
    if scheme.lower() != "bearer":
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization scheme. Expected 'Bearer'"
        )

    payload = await verify_token(token)
    return get_user_id_from_payload(payload)
