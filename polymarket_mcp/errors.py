"""Exceptions raised by config, client wrapper and upstream calls."""


class PolymarketMCPError(Exception):
    """Base class for all server errors."""


class ConfigError(PolymarketMCPError):
    """Invalid or incomplete configuration. Fatal at startup."""


class MissingCredential(ConfigError):
    def __init__(self, name: str):
        super().__init__(f"Missing required environment variable: {name}")
        self.name = name


class NotInitialized(PolymarketMCPError):
    def __init__(self):
        super().__init__("Client not initialized. Call initialize() first.")


class ReadonlyModeViolation(PolymarketMCPError):
    def __init__(self):
        super().__init__(
            "Trading is disabled in readonly mode. Set POLYMARKET_READONLY=false to enable trading."
        )


class UpstreamError(PolymarketMCPError):
    """Non-2xx response from an upstream HTTP API."""

    def __init__(self, message: str, status_code: int, reason: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
