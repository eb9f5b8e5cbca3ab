"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from . import dependencies, schemas, security, service
from .repository import UserRepository

router = APIRouter(prefix="/auth")


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    payload: schemas.RegisterRequest,
    users: UserRepository = Depends(dependencies.get_user_repository),
    tokens: security.TokenService = Depends(dependencies.get_token_service),
) -> schemas.AuthResponse:
    return await service.register(payload, users=users, tokens=tokens)


@router.post("/login")
async def login(
    payload: schemas.LoginRequest,
    users: UserRepository = Depends(dependencies.get_user_repository),
    tokens: security.TokenService = Depends(dependencies.get_token_service),
) -> schemas.AuthResponse:
    return await service.login(payload, users=users, tokens=tokens)


@router.post("/refresh")
async def refresh(
    payload: schemas.RefreshRequest,
    tokens: security.TokenService = Depends(dependencies.get_token_service),
) -> schemas.TokenPairResponse:
    return await service.refresh_tokens(payload, tokens=tokens)


@router.get("/check")
async def check(
    current_user: schemas.User = Depends(dependencies.get_current_user),
) -> schemas.CheckResponse:
    return schemas.CheckResponse(username=current_user.username)
