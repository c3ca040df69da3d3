"""Pydantic DTOs for the sidebar menu and route resolution."""

from pydantic import BaseModel


class RouteSchema(BaseModel):
    path: str
    page: str
    title: str
    entity_slug: str | None = None
    public: bool = False


class NavigationResponse(BaseModel):
    menu: list[RouteSchema]
    routes: list[RouteSchema]


class ResolutionResponse(BaseModel):
    """Where a requested path lands: the route to render and any redirect."""

    requested: str
    route: RouteSchema | None = None
    redirect: str | None = None
