"""Account schemas: registration, login and the signed-in household."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from preptrac.models.enums import ActivityLevel


class _Credentials(BaseModel):
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class UserRegister(_Credentials):
    """Open a household account.

    The activity level may be set up front; it can be changed later from the
    household settings.
    """

    name: str | None = Field(None, max_length=255)
    activity_level: ActivityLevel | None = None


class UserLogin(_Credentials):
    pass


class UserResponse(BaseModel):
    """Account owner as returned with a token."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str | None
    activity_level: ActivityLevel | None


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse


class AccountResponse(UserResponse):
    """Account owner plus a summary of what the household tracks."""

    item_count: int
    category_count: int
    location_count: int
    family_member_count: int
