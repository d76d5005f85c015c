"""
User Domain Models

Profiles, roles and the login/registration payloads.
"""
import re
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Optional, Literal


Role = Literal["consumer", "vendor", "admin"]

# Role hierarchy: admin > vendor > consumer
ROLE_LEVELS = {
    "admin": 3,
    "vendor": 2,
    "consumer": 1,
}

PORTAL_REDIRECTS = {
    "admin": "/admin/dashboard",
    "vendor": "/vendor/dashboard",
    "consumer": "/",
}

_PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


class UserProfile(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    role: Role = "consumer"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def is_vendor(self) -> bool:
        return self.role == "vendor"


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=2)
    email: EmailStr
    password: str = Field(..., min_length=8)
    confirm_password: str = Field(..., min_length=1)
    role: Literal["consumer", "vendor"]
    terms: bool

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        if not _PASSWORD_PATTERN.match(value):
            raise ValueError("Password must include uppercase, lowercase, and a number")
        return value

    @field_validator("terms")
    @classmethod
    def terms_accepted(cls, value: bool) -> bool:
        if not value:
            raise ValueError("You must agree to the terms and conditions")
        return value

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self
