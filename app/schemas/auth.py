from pydantic import BaseModel, EmailStr, Field, field_validator

# bcrypt хэширует не больше 72 байт
MAX_PASSWORD_BYTES = 72


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserRegister(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=100)

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes in UTF-8")
        return v


class UserRead(BaseModel):
    id: int
    email: EmailStr
    name: str

    class Config:
        from_attributes = True


class UserEnvelope(BaseModel):
    user: UserRead
