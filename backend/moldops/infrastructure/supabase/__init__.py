from .auth_gateway import SupabaseAuthGateway
from .data_gateway import SupabaseDataGateway

__all__ = ["SupabaseAuthGateway", "SupabaseDataGateway"]
