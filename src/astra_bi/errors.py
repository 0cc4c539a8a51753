"""Exception hierarchy for AstraBI."""


class AstraBIError(Exception):
    """Base class for all AstraBI failures."""


class GatewayError(AstraBIError):
    """Network, authorization or payload failure talking to the board API."""


class CompletionError(AstraBIError):
    """Transport or API failure talking to the completion service."""


class ConfigError(AstraBIError):
    """Invalid or incomplete configuration."""
