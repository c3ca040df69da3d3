"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity (or entity type) does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class GatewayError(Exception):
    """Raised when the remote data gateway rejects or fails a call.

    Backend-agnostic — works for the hosted Supabase gateway and the local
    SQLAlchemy one.
    """

    def __init__(self, operation: str, table: str, status_code: int, message: str):
        self.operation = operation
        self.table = table
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{operation} {table}] {status_code}: {message}")


class AuthenticationError(Exception):
    """Raised when sign-in is rejected; carries the gateway's raw message."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class PermissionDeniedError(Exception):
    """Raised when the session role set does not intersect the permitted roles."""

    def __init__(self, entity_type: str, operation: str):
        self.entity_type = entity_type
        self.operation = operation
        super().__init__(f"Not allowed to {operation} {entity_type}")


class DraftValidationError(Exception):
    """Raised when a form draft does not match its entity schema."""

    def __init__(self, entity_type: str, errors: list[dict]):
        self.entity_type = entity_type
        self.errors = errors
        super().__init__(f"Invalid {entity_type} draft: {len(errors)} error(s)")
