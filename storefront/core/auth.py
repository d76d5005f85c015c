"""
Authentication dependencies
Validates Supabase access tokens and resolves the caller's role
"""
import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from storefront.core.config import settings
from storefront.domain.user import ROLE_LEVELS, UserProfile
from storefront.repositories.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)

# Security scheme for bearer tokens
security = HTTPBearer(auto_error=False)

JWT_ALGORITHM = "HS256"
JWT_AUDIENCE = "authenticated"

# Roles a user may hold through their own sign-up metadata
SELF_ASSIGNED_ROLES = ("consumer", "vendor")


def decode_supabase_token(token: str) -> dict:
    """
    Decode and validate a Supabase access token.

    Supabase access token structure:
    {
        "sub": "user uuid",
        "email": "user@example.com",
        "aud": "authenticated",
        "role": "authenticated",
        "user_metadata": {"name": "...", "role": "vendor"},
        "exp": 1234567890
    }
    """
    if not settings.SUPABASE_JWT_SECRET:
        raise ValueError("SUPABASE_JWT_SECRET is not set")

    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[JWT_ALGORITHM],
            audience=JWT_AUDIENCE
        )
    except JWTError as e:
        if "expired" in str(e).lower():
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token has expired",
                headers={"WWW-Authenticate": "Bearer"}
            )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"}
        )


def resolve_role(user_id: str, metadata: dict, profiles: Optional[ProfileRepository] = None) -> str:
    """
    Role from the profiles table, falling back to the sign-up metadata

    Users can edit their own metadata, so it never grants more than vendor.
    A failed profile lookup resolves to consumer.
    """
    try:
        role = (profiles or ProfileRepository()).get_role(user_id)
    except Exception as e:
        logger.error(f"Error fetching role for {user_id}: {e}")
        return "consumer"

    if not role:
        role = metadata.get("role")
        if role not in SELF_ASSIGNED_ROLES:
            role = "consumer"

    return role if role in ROLE_LEVELS else "consumer"


def user_from_payload(payload: dict) -> UserProfile:
    user_id = payload.get("sub")
    email = payload.get("email")

    if not user_id or not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload: missing user id or email",
            headers={"WWW-Authenticate": "Bearer"}
        )

    metadata = payload.get("user_metadata") or {}
    return UserProfile(
        id=user_id,
        email=email,
        name=metadata.get("name"),
        role=resolve_role(user_id, metadata),
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> UserProfile:
    """
    Dependency that extracts and validates the current user from the
    Supabase access token.

    Usage:
        @router.get("/orders")
        async def my_orders(user: UserProfile = Depends(get_current_user)):
            ...
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"}
        )

    return user_from_payload(decode_supabase_token(credentials.credentials))


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[UserProfile]:
    """Optional authentication - returns None if no valid token provided."""
    if not credentials:
        return None

    try:
        return user_from_payload(decode_supabase_token(credentials.credentials))
    except HTTPException:
        return None


def require_role(required_role: str):
    """
    Dependency factory for role-based access control.

    Usage:
        @router.post("/import")
        async def run_import(user: UserProfile = Depends(require_role("admin"))):
            ...
    """
    async def role_checker(
        user: UserProfile = Depends(get_current_user)
    ) -> UserProfile:
        # Role hierarchy: admin > vendor > consumer
        user_level = ROLE_LEVELS.get(user.role, 0)
        required_level = ROLE_LEVELS.get(required_role, 0)

        if user_level < required_level:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required role: {required_role}, your role: {user.role}"
            )

        return user

    return role_checker


# Convenience dependencies for common role requirements
require_admin = require_role("admin")
require_vendor = require_role("vendor")
