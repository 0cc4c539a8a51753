"""Board data gateways."""

from astra_bi.connectors.base import BaseGateway
from astra_bi.connectors.local import LocalGateway
from astra_bi.connectors.monday import MondayGateway
from astra_bi.connectors.registry import GatewayRegistry

__all__ = ["BaseGateway", "GatewayRegistry", "LocalGateway", "MondayGateway"]
