from .client import GatewayAPIError, GatewayClient
from .query_builder import QueryBuilder

__all__ = ["GatewayAPIError", "GatewayClient", "QueryBuilder"]
