"""
Auth Schemas
"""
from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1)
    first_name: str = Field(alias="firstName", min_length=1, max_length=255)
    last_name: str = Field(alias="lastName", min_length=1, max_length=255)


class SigninRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
