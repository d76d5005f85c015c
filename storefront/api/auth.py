"""
Authentication API endpoints
- Storefront, vendor and admin portal login
- Account registration
"""
from fastapi import APIRouter, Depends, HTTPException, status

from storefront.core.auth import get_current_user
from storefront.domain.user import LoginRequest, RegisterRequest, UserProfile
from storefront.services.auth_service import (
    AuthService,
    AuthenticationError,
    Portal,
    PortalAccessError,
)

router = APIRouter()


class PortalLoginRequest(LoginRequest):
    portal: Portal = "consumer"


@router.post("/login")
async def login(credentials: PortalLoginRequest):
    """
    Sign in on a portal

    Returns the Supabase session tokens and the path the client should
    navigate to (/admin/dashboard, /vendor/dashboard or /).
    """
    try:
        result = AuthService().login(credentials.email, credentials.password, credentials.portal)
        return {
            "status": "success",
            "message": f"Welcome back, {result.user.name or result.user.email}!",
            "data": result.model_dump()
        }

    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"}
        )
    except PortalAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error signing in: {str(e)}")


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest):
    """Create a consumer or vendor account"""
    try:
        result = AuthService().register(request)
        return {
            "status": "success",
            "message": "Your account has been created!",
            "data": result.model_dump()
        }

    except AuthenticationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error creating account: {str(e)}")


@router.get("/me")
async def get_me(user: UserProfile = Depends(get_current_user)):
    return {"status": "success", "data": user.model_dump()}
