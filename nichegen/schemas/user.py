# nichegen/schemas/user.py

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# bcrypt only accepts this many bytes of input
MAX_PASSWORD_BYTES = 72


def _check_password_length(value: str) -> str:
    if len(value.encode('utf-8')) > MAX_PASSWORD_BYTES:
        raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class RegisterSchema(BaseModel):
    """Schema for user registration."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator('email')
    @classmethod
    def normalise_email(cls, value: str) -> str:
        return value.lower()

    @field_validator('password')
    @classmethod
    def check_password_length(cls, value: str) -> str:
        return _check_password_length(value)


class LoginSchema(BaseModel):
    """Schema for user login."""
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator('email')
    @classmethod
    def normalise_email(cls, value: str) -> str:
        return value.lower()

    @field_validator('password')
    @classmethod
    def check_password_length(cls, value: str) -> str:
        return _check_password_length(value)
