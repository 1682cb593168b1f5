"""Token admin — ?token= ou header X-Admin-Token."""
import os

from fastapi import HTTPException, Request


def admin_token() -> str:
    return os.getenv("ADMIN_TOKEN", "changeme")


def request_token(request: Request) -> str:
    return request.query_params.get("token") or request.headers.get("X-Admin-Token", "")


def is_admin(request: Request) -> bool:
    return request_token(request) == admin_token()


def check_token(request: Request) -> str:
    token = request_token(request)
    if token != admin_token():
        raise HTTPException(403, "Accesso negato")
    return token
