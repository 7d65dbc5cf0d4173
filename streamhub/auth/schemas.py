# streamhub/auth/schemas.py
from pydantic import BaseModel

from streamhub.users.schemas import UserOut


class SignInRequest(BaseModel):
    email: str
    password: str


class AuthOut(BaseModel):
    user: UserOut
    token: str
