"""Load and expose configuration from environment variables."""

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from polymarket_mcp.errors import ConfigError, MissingCredential

DEFAULT_CHAIN_ID = 137  # Polygon mainnet
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Config:
    private_key: str
    funder: str
    chain_id: int = DEFAULT_CHAIN_ID
    readonly: bool = False
    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    passphrase: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None

    @property
    def has_api_creds(self) -> bool:
        return bool(self.api_key and self.api_secret and self.passphrase)

    def __repr__(self) -> str:
        # never leak the key or secrets into logs
        return (
            f"Config(funder={self.funder!r}, chain_id={self.chain_id}, readonly={self.readonly}, "
            f"has_api_creds={self.has_api_creds})"
        )


def derive_address(private_key: str) -> str:
    """Checksummed address for a hex private key (with or without 0x)."""
    from eth_account import Account

    try:
        return Account.from_key(private_key).address
    except Exception as e:
        raise ConfigError(f"Invalid private key: {e}") from e


def _parse_readonly(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).lower() == "true"


def _parse_chain_id(value: Any) -> int:
    if value is None or value == "":
        return DEFAULT_CHAIN_ID
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid chain id: {value!r}") from e


def _parse_log_level(value: Optional[str]) -> str:
    if not value:
        return DEFAULT_LOG_LEVEL
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"Invalid log level: {value!r} (expected one of {', '.join(LOG_LEVELS)})")
    return level


def _build_config(
    private_key: Optional[str],
    funder: Optional[str] = None,
    chain_id: Any = None,
    readonly: Any = None,
    api_key: Optional[str] = None,
    api_secret: Optional[str] = None,
    passphrase: Optional[str] = None,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> Config:
    if not private_key:
        raise MissingCredential("POLYMARKET_PRIVATE_KEY")

    creds = [api_key or None, api_secret or None, passphrase or None]
    if any(creds) and not all(creds):
        raise ConfigError(
            "POLYMARKET_API_KEY, POLYMARKET_API_SECRET and POLYMARKET_PASSPHRASE must be set together"
        )

    return Config(
        private_key=private_key,
        funder=funder or derive_address(private_key),
        chain_id=_parse_chain_id(chain_id),
        readonly=_parse_readonly(readonly),
        api_key=creds[0],
        api_secret=creds[1],
        passphrase=creds[2],
        log_level=_parse_log_level(log_level),
        log_file=log_file or None,
    )


def load_config(env: Optional[Mapping[str, str]] = None) -> Config:
    """Build a Config from the environment (or the given mapping)."""
    if env is None:
        load_dotenv()
        env = os.environ
    return _build_config(
        private_key=env.get("POLYMARKET_PRIVATE_KEY"),
        funder=env.get("POLYMARKET_FUNDER"),
        chain_id=env.get("POLYMARKET_CHAIN_ID"),
        readonly=env.get("POLYMARKET_READONLY"),
        api_key=env.get("POLYMARKET_API_KEY"),
        api_secret=env.get("POLYMARKET_API_SECRET"),
        passphrase=env.get("POLYMARKET_PASSPHRASE"),
        log_level=env.get("LOG_LEVEL"),
        log_file=env.get("LOG_FILE"),
    )


def config_from_options(options: Mapping[str, Any]) -> Config:
    """Build a Config for embedding, e.g. {"private_key": "0x..", "readonly": True}."""
    return _build_config(
        private_key=options.get("private_key"),
        funder=options.get("funder"),
        chain_id=options.get("chain_id"),
        readonly=options.get("readonly"),
        api_key=options.get("api_key"),
        api_secret=options.get("api_secret"),
        passphrase=options.get("passphrase"),
        log_level=options.get("log_level"),
        log_file=options.get("log_file"),
    )


_config: Optional[Config] = None


def get_config() -> Config:
    """Environment config, loaded once per process."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the memoized config (tests only)."""
    global _config
    _config = None
