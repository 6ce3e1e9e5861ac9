"""External service integrations."""

from .gateway import ApiGateway, PortalAPIError

__all__ = ["ApiGateway", "PortalAPIError"]
