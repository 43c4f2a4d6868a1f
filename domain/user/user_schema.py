from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, StrictInt, StrictStr, field_validator


class UserBase(BaseModel):
    email: EmailStr
    username: StrictStr = Field(..., min_length=1)


class UserCreate(UserBase):
    password: StrictStr = Field(..., min_length=1)


class User(UserBase):
    id: int
    role: str
    point: int
    created_at: datetime

    class Config:
        from_attributes = True


class UserUpdate(UserBase):
    pass


class PasswordUpdate(BaseModel):
    password: StrictStr = Field(..., min_length=1)


class PointUpdate(BaseModel):
    point: StrictInt

    @field_validator("point")
    @classmethod
    def point_must_change_balance(cls, value):
        if value == 0:
            raise ValueError("point must be a non-zero integer")
        return value


class TempPasswordRequest(BaseModel):
    email: EmailStr
