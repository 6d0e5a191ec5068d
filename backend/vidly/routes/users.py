"""
Vidly Backend — User & Auth Route Handlers
===========================================

Routes:
    POST /api/users      register; token returned in the x-auth-token header
    GET  /api/users/me   current user's profile              (authenticated)
    POST /api/auth       login; the token IS the response body (text/plain)

No response from these routes ever contains a password or its hash.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Response
from fastapi.responses import PlainTextResponse

from vidly.context import AppContext, get_context
from vidly.middleware.auth import AUTH_HEADER, require_authenticated
from vidly.schemas.common import ErrorResponse
from vidly.schemas.user import TokenClaims, UserOut, UserProfile
from vidly.services.user_service import user_service

router = APIRouter(prefix="/api/users", tags=["Users"])
auth_router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "",
    response_model=UserOut,
    responses={400: {"description": "Invalid payload or email already registered", "model": ErrorResponse}},
    summary="Register a user",
)
async def register_user(
    response: Response,
    payload: Any = Body(default=None),
    ctx: AppContext = Depends(get_context),
) -> UserOut:
    user, token = await user_service.register(ctx.db, ctx.auth, payload)
    response.headers[AUTH_HEADER] = token
    return user


@router.get(
    "/me",
    response_model=UserProfile,
    responses={401: {"description": "No token provided", "model": ErrorResponse}},
    summary="Current user's profile",
)
async def get_me(
    claims: TokenClaims = Depends(require_authenticated),
    ctx: AppContext = Depends(get_context),
) -> UserProfile:
    return await user_service.get_current_user(ctx.db, claims)


@auth_router.post(
    "",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Signed auth token", "content": {"text/plain": {}}},
        400: {"description": "Invalid email or password", "model": ErrorResponse},
    },
    summary="Log in and receive an auth token",
)
async def login(
    payload: Any = Body(default=None),
    ctx: AppContext = Depends(get_context),
) -> PlainTextResponse:
    token = await ctx.auth.login(ctx.db, payload)
    return PlainTextResponse(token)
