"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends, Header, HTTPException, status

from moldops.config import get_settings
from moldops.application.catalog import get_entity
from moldops.application.interfaces import AuthGateway, DataGateway
from moldops.application.services import (
    AppContext,
    DashboardService,
    ListEntityController,
    NavigationService,
    NotificationCenter,
    ReportsService,
    SessionService,
)
from moldops.domain.exceptions import EntityNotFoundError
from moldops.infrastructure.repositories import LocalAuthGateway, SQLAlchemyDataGateway
from moldops.infrastructure.supabase import SupabaseAuthGateway, SupabaseDataGateway


@lru_cache
def get_notification_center() -> NotificationCenter:
    """Process-wide notice broadcaster shared by every controller and SSE client."""
    return NotificationCenter()


@lru_cache
def get_local_data_gateway() -> SQLAlchemyDataGateway:
    from moldops.infrastructure.database.session import async_session_factory

    return SQLAlchemyDataGateway(async_session_factory)


@lru_cache
def get_auth_gateway() -> AuthGateway:
    """Singleton auth gateway; local tokens live in its memory."""
    settings = get_settings()
    if settings.uses_supabase:
        return SupabaseAuthGateway(
            settings.supabase_url,
            settings.supabase_anon_key,
            timeout=settings.gateway_timeout,
        )
    return LocalAuthGateway(get_local_data_gateway())


def get_data_gateway() -> DataGateway:
    """A Supabase gateway per request (it carries the caller's token), else the shared local one."""
    settings = get_settings()
    if settings.uses_supabase:
        return SupabaseDataGateway(
            settings.supabase_url,
            settings.supabase_anon_key,
            timeout=settings.gateway_timeout,
        )
    return get_local_data_gateway()


def get_bearer_token(authorization: str | None = Header(None)) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_session_service(
    token: str | None = Depends(get_bearer_token),
    auth_gateway: AuthGateway = Depends(get_auth_gateway),
    data_gateway: DataGateway = Depends(get_data_gateway),
) -> SessionService:
    """Provides a SessionService booted from the request's bearer token."""
    settings = get_settings()
    context = AppContext(theme=settings.default_theme, light_mode=settings.default_light_mode)
    service = SessionService(auth_gateway, data_gateway, context)
    await service.boot(token)
    return service


async def get_app_context(
    session: SessionService = Depends(get_session_service),
) -> AppContext:
    return session.context


async def require_user(context: AppContext = Depends(get_app_context)) -> AppContext:
    """Reject the request unless it carries a live session."""
    if not context.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not signed in",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return context


async def get_entity_controller(
    slug: str,
    context: AppContext = Depends(require_user),
    gateway: DataGateway = Depends(get_data_gateway),
    notifier: NotificationCenter = Depends(get_notification_center),
) -> AsyncGenerator[ListEntityController, None]:
    """Provides a mounted controller for ``slug``; it is unmounted after the response."""
    try:
        entity = get_entity(slug)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    settings = get_settings()
    async with ListEntityController(
        entity, gateway, context, notifier, page_size=settings.default_page_size
    ) as controller:
        yield controller


async def get_dashboard_service(
    context: AppContext = Depends(require_user),
    gateway: DataGateway = Depends(get_data_gateway),
) -> DashboardService:
    return DashboardService(gateway)


def get_navigation_service() -> NavigationService:
    return NavigationService()


def get_reports_service() -> ReportsService:
    return ReportsService()
