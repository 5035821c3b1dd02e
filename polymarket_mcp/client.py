"""Polymarket CLOB client wrapper: lazy L2 client, upstream URLs, readonly guard."""
from typing import Any, Optional

from loguru import logger

from polymarket_mcp.config import Config, derive_address, get_config
from polymarket_mcp.errors import NotInitialized, ReadonlyModeViolation

CLOB_API_URL = "https://clob.polymarket.com"
GAMMA_API_URL = "https://gamma-api.polymarket.com"
DATA_API_URL = "https://data-api.polymarket.com"

# py_clob_client signature types
SIGNATURE_TYPE_EOA = 0  # funder == signer
SIGNATURE_TYPE_POLY_GNOSIS_SAFE = 2  # browser wallet proxy / Gnosis Safe


def select_signature_type(funder: str, signer: str) -> int:
    """EOA when the funder is the signer itself, proxy wallet otherwise."""
    if funder.lower() == signer.lower():
        return SIGNATURE_TYPE_EOA
    return SIGNATURE_TYPE_POLY_GNOSIS_SAFE


class ClobClientWrapper:
    """Single access point to the CLOB client and the fixed upstream URLs.

    The client is built once by initialize() and never replaced afterwards, so
    concurrent tool calls can share it without locking. A ready client may be
    passed in directly (tests, embedding).
    """

    def __init__(self, config: Optional[Config] = None, client: Any = None):
        self.config = config or get_config()
        self._client = client

    def initialize(self) -> None:
        if self._client is not None:
            return

        from py_clob_client.client import ClobClient
        from py_clob_client.clob_types import ApiCreds

        signer = derive_address(self.config.private_key)
        funder = self.config.funder
        signature_type = select_signature_type(funder, signer)
        logger.info(f"Signer {signer} | funder {funder} | signature_type {signature_type}")

        client = ClobClient(
            host=CLOB_API_URL,
            key=self.config.private_key,
            chain_id=self.config.chain_id,
            signature_type=signature_type,
            funder=funder,
        )

        if self.config.has_api_creds:
            client.set_api_creds(
                ApiCreds(
                    api_key=self.config.api_key,
                    api_secret=self.config.api_secret,
                    api_passphrase=self.config.passphrase,
                )
            )
            logger.info("CLOB client using provided API credentials")
        else:
            try:
                client.set_api_creds(client.create_or_derive_api_creds())
                logger.info("CLOB client using derived API credentials")
            except Exception as e:
                logger.warning(f"Failed to derive API credentials, using unauthenticated client: {e}")

        self._client = client

    @property
    def initialized(self) -> bool:
        return self._client is not None

    def get_client(self) -> Any:
        if self._client is None:
            raise NotInitialized()
        return self._client

    def is_readonly(self) -> bool:
        return self.config.readonly

    def ensure_write_access(self) -> None:
        if self.config.readonly:
            raise ReadonlyModeViolation()

    def get_gamma_api_url(self) -> str:
        return GAMMA_API_URL

    def get_clob_api_url(self) -> str:
        return CLOB_API_URL

    def get_data_api_url(self) -> str:
        return DATA_API_URL

    def get_funder(self) -> str:
        return self.config.funder
