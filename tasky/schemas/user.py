from typing import List

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    name: str
    email: str
    password: str


class UserUpdate(BaseModel):
    # Missing fields are written back as empty strings
    name: str = ""
    email: str = ""
    password: str = ""


class UserResponse(BaseModel):
    id: str
    name: str = ""
    email: str = ""


class UserList(BaseModel):
    users: List[UserResponse]
    count: int


class CreatedUser(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    user_id: str = Field(..., alias="userId")
