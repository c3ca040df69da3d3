from .data_gateway import DataGateway
from .auth_gateway import AuthGateway
from .notifier import Notifier

__all__ = [
    "DataGateway",
    "AuthGateway",
    "Notifier",
]
