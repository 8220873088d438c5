from fastapi import APIRouter
from pydantic import BaseModel

from core.deps import http_exc
from core.security import Role, resolve_role

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    username: str
    password: str = ""


class LoginResponse(BaseModel):
    username: str
    role: Role


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest):
    # 只對照三組 demo 帳號決定角色；不發 token，也不做權限檢查
    if not body.username.strip():
        raise http_exc(400, "Username is required")
    return {"username": body.username, "role": resolve_role(body.username, body.password)}
