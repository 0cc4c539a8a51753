"""Gateway selection from a source name or from runtime settings."""

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Type

from astra_bi.connectors.base import BaseGateway
from astra_bi.connectors.local import LocalGateway
from astra_bi.connectors.monday import MondayGateway
from astra_bi.errors import ConfigError

if TYPE_CHECKING:
    from astra_bi.config import Settings


class GatewayRegistry:
    """Maps source ids ("monday", "local") to gateway classes."""

    _gateways: dict[str, Type[BaseGateway]] = {
        MondayGateway.source_id: MondayGateway,
        LocalGateway.source_id: LocalGateway,
    }

    @classmethod
    def get(cls, source_id: str, **kwargs) -> BaseGateway:
        """Instantiate the gateway for source_id; kwargs go to its constructor."""
        try:
            gateway_cls = cls._gateways[source_id.lower()]
        except KeyError:
            raise ConfigError(
                f"Unknown board source: {source_id}. Available: {cls.available_sources()}"
            ) from None
        return gateway_cls(**kwargs)

    @classmethod
    def for_settings(
        cls, settings: "Settings", boards_file: Optional[str | Path] = None
    ) -> BaseGateway:
        """
        A boards file selects the offline gateway. Otherwise monday.com is used
        with the configured token and timeout; a missing token is a ConfigError.
        """
        if boards_file:
            return cls.get(LocalGateway.source_id, path=boards_file)
        if not settings.monday_api_token:
            raise ConfigError("MONDAY_API_TOKEN is not set. Set it or pass --boards-file.")
        return cls.get(
            MondayGateway.source_id,
            api_token=settings.monday_api_token,
            timeout=settings.timeout,
        )

    @classmethod
    def available_sources(cls) -> list[str]:
        return sorted(cls._gateways)
