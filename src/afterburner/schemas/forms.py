"""Pydantic schemas for HTML form submissions."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from afterburner.models.user import UserType

# Largest value the INTEGER points column holds on every backend
MAX_POINTS = 2**31 - 1


class FormModel(BaseModel):
    """Base for form schemas: strips whitespace and ignores unknown fields."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


class SignupForm(FormModel):
    """Self-service signup; the role is always cadet."""

    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    t_shirt_size: str | None = Field(default=None, max_length=10)

    @field_validator("t_shirt_size", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        if v == "":
            return None
        return v


class ApplicationForm(FormModel):
    """Application to a program session."""

    repo: str = Field(min_length=1, max_length=255)
    project_description: str = Field(min_length=1)


class DecorateForm(FormModel):
    """Award of a medal to a user."""

    github_login: str = Field(min_length=1)
    medal_id: int


class PermissionForm(FormModel):
    """New permission."""

    slug: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=255)


class MedalForm(FormModel):
    """New medal for the catalog."""

    name: str = Field(min_length=1, max_length=255)
    image: str = Field(min_length=1, max_length=500)
    image_disabled: str = Field(min_length=1, max_length=500)
    points: int = Field(ge=0, le=MAX_POINTS)
    sort_key: str = Field(min_length=1, max_length=50)
    description: str = Field(min_length=1)
    secret: bool = False

    @field_validator("points", mode="before")
    @classmethod
    def validate_points(cls, v: object) -> object:
        """Only accept an unsigned integer written as plain digits."""
        if isinstance(v, str):
            v = v.strip()
            if not v.isdigit():
                raise ValueError("points must be an unsigned integer")
            return int(v)
        return v

    @field_validator("secret", mode="before")
    @classmethod
    def checkbox_to_bool(cls, v: object) -> object:
        """HTML checkboxes post "on" when ticked and nothing otherwise."""
        if isinstance(v, str):
            return v == "on"
        return v


class UserForm(FormModel):
    """User created by an administrator, with explicit role and permissions."""

    name: str = Field(min_length=1, max_length=255)
    github_login: str = Field(min_length=1, max_length=39)
    email: EmailStr
    t_shirt_size: str = Field(min_length=1, max_length=10)
    type: UserType
    permissions: list[str] = Field(default_factory=list)
