from pydantic import BaseModel, EmailStr, Field, StrictStr


class LoginRequest(BaseModel):
    email: EmailStr
    password: StrictStr = Field(..., min_length=1)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AccountDelete(BaseModel):
    withdrawal_reason: StrictStr = Field(..., min_length=1)
    feedback: StrictStr = Field(..., min_length=1)
