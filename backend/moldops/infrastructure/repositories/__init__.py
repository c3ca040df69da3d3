from .local_auth_gateway import LocalAuthGateway
from .sqlalchemy_data_gateway import SQLAlchemyDataGateway

__all__ = ["LocalAuthGateway", "SQLAlchemyDataGateway"]
