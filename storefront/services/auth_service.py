"""
Auth Service

Password sign-in and sign-up through Supabase Auth. Each portal (storefront,
vendor, admin) only admits its own role; a successful login tells the client
where to go next.
"""
import logging
from typing import Callable, Literal, Optional

from pydantic import BaseModel
from supabase import Client

from storefront.core.auth import resolve_role
from storefront.core.database import new_supabase_client
from storefront.domain.user import PORTAL_REDIRECTS, RegisterRequest, UserProfile
from storefront.repositories.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)

Portal = Literal["consumer", "vendor", "admin"]


class AuthenticationError(Exception):
    """Wrong credentials or failed sign-up"""


class PortalAccessError(Exception):
    """Valid credentials used on a portal the role may not enter"""


class LoginResult(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    user: UserProfile
    redirect_path: str


class RegisterResult(BaseModel):
    user_id: str
    email: str
    role: str
    confirmation_required: bool


def check_portal(role: str, portal: Portal) -> None:
    """
    Admin portal admits admins only, vendor portal vendors only; the
    storefront login admits everybody.
    """
    if portal == "admin" and role != "admin":
        raise PortalAccessError("Access denied. Admin privileges required.")
    if portal == "vendor" and role != "vendor":
        raise PortalAccessError("Access denied. This login is for vendors only.")


class AuthService:
    """Supabase Auth sign-in and sign-up"""

    def __init__(
        self,
        client_factory: Callable[[], Client] = new_supabase_client,
        profiles: Optional[ProfileRepository] = None
    ):
        self.client_factory = client_factory
        self.profiles = profiles or ProfileRepository()

    def login(self, email: str, password: str, portal: Portal = "consumer") -> LoginResult:
        """
        Sign in with email and password

        Raises:
            AuthenticationError: Invalid credentials
            PortalAccessError: Role not allowed on this portal (the session is
                signed out again)
        """
        client = self.client_factory()

        try:
            response = client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            logger.warning(f"Login failed for {email}: {e}")
            raise AuthenticationError("Invalid email or password")

        if response.user is None or response.session is None:
            raise AuthenticationError("Invalid email or password")

        metadata = response.user.user_metadata or {}
        role = resolve_role(response.user.id, metadata, self.profiles)

        try:
            check_portal(role, portal)
        except PortalAccessError:
            client.auth.sign_out()
            raise

        user = UserProfile(
            id=response.user.id,
            email=response.user.email or email,
            name=metadata.get("name"),
            role=role,
        )
        logger.info(f"User {user.id} logged in as {role} via {portal} portal")

        return LoginResult(
            access_token=response.session.access_token,
            refresh_token=response.session.refresh_token,
            expires_in=response.session.expires_in,
            user=user,
            redirect_path=PORTAL_REDIRECTS[role],
        )

    def register(self, request: RegisterRequest) -> RegisterResult:
        """
        Create an account carrying name and role as user metadata

        Raises:
            AuthenticationError: Sign-up rejected (e.g. email already in use)
        """
        client = self.client_factory()

        try:
            response = client.auth.sign_up({
                "email": request.email,
                "password": request.password,
                "options": {"data": {"name": request.name, "role": request.role}},
            })
        except Exception as e:
            logger.warning(f"Registration failed for {request.email}: {e}")
            raise AuthenticationError(str(e))

        if response.user is None:
            raise AuthenticationError("Registration failed")

        logger.info(f"Registered {request.role} account {response.user.id}")

        return RegisterResult(
            user_id=response.user.id,
            email=request.email,
            role=request.role,
            confirmation_required=response.session is None,
        )
