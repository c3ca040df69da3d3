"""Navigation — the fixed path → page map, legacy aliases and the sign-in guard."""

from dataclasses import dataclass

from moldops.application.catalog import EntityDefinition, list_entities

LOGIN_PATH = "/"
HOME_PATH = "/dashboard"

# Pages shown in the sidebar, in display order.
MENU_PATHS = (
    "/dashboard",
    "/users",
    "/machines",
    "/molds",
    "/products",
    "/raw-materials",
    "/production-orders",
    "/finished-goods",
    "/customers",
    "/sales-orders",
    "/quality-control",
    "/maintenance",
    "/purchase-orders",
    "/reports",
    "/settings",
)


@dataclass(frozen=True)
class Route:
    path: str
    page: str
    title: str
    entity_slug: str | None = None
    public: bool = False


@dataclass(frozen=True)
class Resolution:
    """Where a requested path lands for the current session."""

    requested: str
    route: Route | None
    redirect: str | None = None

    @property
    def found(self) -> bool:
        return self.route is not None or self.redirect is not None


def _entity_route(entity: EntityDefinition, path: str | None = None) -> Route:
    return Route(path=path or entity.path, page="entity", title=entity.title, entity_slug=entity.slug)


def build_routes(entities: list[EntityDefinition] | None = None) -> dict[str, Route]:
    entities = entities if entities is not None else list_entities()
    routes: dict[str, Route] = {
        LOGIN_PATH: Route(LOGIN_PATH, "login", "Sign in", public=True),
        HOME_PATH: Route(HOME_PATH, "dashboard", "Dashboard"),
    }
    for entity in entities:
        routes[entity.path] = _entity_route(entity)
    routes["/reports"] = Route("/reports", "reports", "Reports")
    routes["/settings"] = Route("/settings", "settings", "Settings")
    for entity in entities:
        for alias in entity.legacy_paths:
            routes[alias] = _entity_route(entity, alias)
    return routes


class NavigationService:
    def __init__(self, routes: dict[str, Route] | None = None):
        self._routes = routes or build_routes()

    @property
    def routes(self) -> list[Route]:
        return list(self._routes.values())

    def menu(self) -> list[Route]:
        return [self._routes[path] for path in MENU_PATHS if path in self._routes]

    def resolve(self, path: str, authenticated: bool) -> Resolution:
        """Apply the sign-in guard to ``path``.

        Signed-out users are sent to the login page from every non-public
        route; signed-in users are sent from the login page to the dashboard.
        """
        normalized = "/" + path.strip().strip("/")
        route = self._routes.get(normalized)
        if route is None:
            return Resolution(requested=normalized, route=None)
        if route.path == LOGIN_PATH and authenticated:
            return Resolution(requested=normalized, route=self._routes[HOME_PATH], redirect=HOME_PATH)
        if not route.public and not authenticated:
            return Resolution(requested=normalized, route=self._routes[LOGIN_PATH], redirect=LOGIN_PATH)
        return Resolution(requested=normalized, route=route)
