"""
Vidly Backend — Authorization Gates
====================================

What:  Route-level gates that run before a handler and either enrich the
       request with verified claims or short-circuit it with an error.
How:   FastAPI dependencies, composed explicitly per route:

           dependencies=[Depends(require_authenticated)]    → any logged-in user
           dependencies=[Depends(require_admin)]            → admin only

       require_admin depends on require_authenticated, so listing the admin
       gate alone runs both, in that order.

Outcomes:
    no x-auth-token header          → AuthenticationError   → 401
    header present, fails verify    → InvalidTokenError     → 400
    verified, isAdmin is not true   → PermissionDeniedError → 403
    verified                        → claims on request.state.user, continue
"""

from typing import Optional

from fastapi import Depends, Header, Request

from vidly.context import AppContext, get_context
from vidly.exceptions import PermissionDeniedError
from vidly.schemas.user import TokenClaims

AUTH_HEADER = "x-auth-token"


async def require_authenticated(
    request: Request,
    ctx: AppContext = Depends(get_context),
    token: Optional[str] = Header(default=None, alias=AUTH_HEADER),
) -> TokenClaims:
    claims = ctx.auth.verify_token(token)
    request.state.user = claims
    return claims


async def require_admin(
    claims: TokenClaims = Depends(require_authenticated),
) -> TokenClaims:
    if claims.is_admin is not True:
        raise PermissionDeniedError()
    return claims
