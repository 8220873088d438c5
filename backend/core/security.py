# core/security.py
"""
Demo 登入：三組固定帳號 → 角色。只回傳角色，不發 token、不做權限控管。
"""
from __future__ import annotations

from typing import Literal

from passlib.context import CryptContext

Role = Literal["admin", "inspector", "vendor"]
DEFAULT_ROLE: Role = "inspector"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(pw: str) -> str:
    return pwd_context.hash(pw)


def verify_password(pw: str, hashed: str) -> bool:
    return pwd_context.verify(pw, hashed)


# username → (hashed password, role)
DEMO_ACCOUNTS: dict[str, tuple[str, Role]] = {
    "admin":     (hash_password("admin123"),   "admin"),
    "inspector": (hash_password("inspect123"), "inspector"),
    "vendor":    (hash_password("vendor123"),  "vendor"),
}


def resolve_role(username: str, password: str) -> Role:
    """帳密相符回傳該角色；其餘一律 inspector（與前端行為一致）"""
    account = DEMO_ACCOUNTS.get(username)
    if account and verify_password(password, account[0]):
        return account[1]
    return DEFAULT_ROLE
