"""Sign-in, sign-out and current-session endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from moldops.application.schemas import (
    LoginRequest,
    LoginResponse,
    SessionResponse,
    ThemeSchema,
    UserSchema,
)
from moldops.application.services import AppContext, SessionService
from moldops.domain.exceptions import AuthenticationError, GatewayError
from moldops.infrastructure.dependencies import get_session_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def _to_session(context: AppContext) -> SessionResponse:
    user = context.user
    return SessionResponse(
        authenticated=context.is_authenticated,
        user=UserSchema(id=user.id, email=user.email) if user else None,
        roles=sorted(context.roles),
        theme=ThemeSchema(
            key=context.theme,
            light_mode=context.light_mode,
            palette=context.palette.to_dict(),
        ),
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    session: SessionService = Depends(get_session_service),
) -> LoginResponse:
    """Password sign-in; the returned access token is the bearer for later calls."""
    try:
        auth_session = await session.sign_in(data.email, data.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)
    except GatewayError as e:
        logger.error("Sign-in failed: %s", e)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    current = _to_session(session.context)
    return LoginResponse(
        **current.model_dump(),
        access_token=auth_session.access_token,
        refresh_token=auth_session.refresh_token,
        expires_in=auth_session.expires_in,
    )


@router.post("/logout", response_model=SessionResponse)
async def logout(session: SessionService = Depends(get_session_service)) -> SessionResponse:
    """End the caller's session. Always succeeds locally."""
    await session.sign_out()
    return _to_session(session.context)


@router.get("/session", response_model=SessionResponse)
async def get_session(session: SessionService = Depends(get_session_service)) -> SessionResponse:
    """The session owning the bearer token, or an anonymous one."""
    return _to_session(session.context)
