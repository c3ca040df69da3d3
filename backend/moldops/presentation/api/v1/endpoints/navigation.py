"""Navigation endpoints — sidebar menu and the sign-in route guard."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from moldops.application.schemas import NavigationResponse, ResolutionResponse, RouteSchema
from moldops.application.services import AppContext, NavigationService, Route
from moldops.infrastructure.dependencies import get_app_context, get_navigation_service

router = APIRouter(prefix="/navigation", tags=["Navigation"])


def _to_route(route: Route) -> RouteSchema:
    return RouteSchema(
        path=route.path,
        page=route.page,
        title=route.title,
        entity_slug=route.entity_slug,
        public=route.public,
    )


@router.get("", response_model=NavigationResponse)
async def get_navigation(
    navigation: NavigationService = Depends(get_navigation_service),
) -> NavigationResponse:
    return NavigationResponse(
        menu=[_to_route(r) for r in navigation.menu()],
        routes=[_to_route(r) for r in navigation.routes],
    )


@router.get("/resolve", response_model=ResolutionResponse)
async def resolve_path(
    path: str = Query(..., description="Client-side path, e.g. /machines"),
    context: AppContext = Depends(get_app_context),
    navigation: NavigationService = Depends(get_navigation_service),
) -> ResolutionResponse:
    """Resolve ``path`` for the caller, applying the sign-in redirects."""
    resolution = navigation.resolve(path, context.is_authenticated)
    if not resolution.found:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No page at '{resolution.requested}'")
    return ResolutionResponse(
        requested=resolution.requested,
        route=_to_route(resolution.route) if resolution.route else None,
        redirect=resolution.redirect,
    )
