from typing import Optional

from pydantic import BaseModel, Field

MIN_PASSWORD_LENGTH = 6


class SignupRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=128)


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=1, max_length=128)


class UserOut(BaseModel):
    id: str
    email: Optional[str] = None


class SignupResponse(BaseModel):
    user: Optional[UserOut] = None
    confirmation_sent: bool = True


class ProviderRedirect(BaseModel):
    url: str
