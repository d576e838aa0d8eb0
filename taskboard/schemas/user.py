from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel

class UserCreate(BaseModel):
    full_name: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class UserRead(BaseModel):
    id: int
    full_name: str
    username: str
    email: str

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True

class LoginRequest(BaseModel):
    username: str
    password: str

class RegisterResponse(BaseModel):
    message: str
    user: UserRead

class TokenResponse(BaseModel):
    token: str
    user: UserRead
