"""Etherscan-style explorer client for the getsourcecode action."""

import json
import logging
import re

import requests

from ..errors import ExplorerRejected, InvalidAddress, NetworkError
from ..models import ChainConfig, ExplorerResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def validate_address(address: str) -> str:
    if not isinstance(address, str) or not ADDRESS_RE.match(address):
        raise InvalidAddress(address)
    return address


class ExplorerClient:
    def __init__(self, api_key: str, timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize the client.

        Args:
            api_key: Explorer API key for the resolved chain
            timeout: Seconds to wait for the explorer before giving up
        """
        self.api_key = api_key
        self.timeout = timeout

    def fetch_source(self, config: ChainConfig, address: str) -> ExplorerResponse:
        """
        Fetch the verified source envelope of a contract.

        A single GET is issued; retrying is left to the caller.

        Args:
            config: Resolved chain configuration
            address: Contract address (0x + 40 hex chars)

        Returns:
            ExplorerResponse holding the raw response body

        Raises:
            InvalidAddress: address is malformed (no request is sent)
            NetworkError: transport failure, timeout or non-2xx status
            ExplorerRejected: explorer answered with an error payload
        """
        validate_address(address)

        params = {
            'chainid': config.chain_id,
            'module': 'contract',
            'action': 'getsourcecode',
            'address': address,
            'apikey': self.api_key,
        }

        logger.info(f"Fetching contract {address} from {config.name} explorer")
        logger.debug(f"GET {config.api_base_url} (chainid={config.chain_id}, timeout={self.timeout}s)")

        try:
            response = requests.get(config.api_base_url, params=params, timeout=self.timeout)
        except requests.Timeout:
            raise NetworkError("timeout")
        except requests.RequestException as e:
            raise NetworkError(e)

        if not 200 <= response.status_code < 300:
            raise NetworkError(f"HTTP {response.status_code}")

        body = response.text
        self._check_explorer_status(body)

        logger.info(f"Received {len(body)} bytes from explorer")
        return ExplorerResponse(
            body=body,
            status_code=response.status_code,
            chain_id=config.chain_id,
            address=address,
        )

    def _check_explorer_status(self, body: str) -> None:
        """Raise ExplorerRejected when a 200 body carries an explorer-level error."""
        try:
            data = json.loads(body)
        except ValueError:
            # Left to the normalizer, which reports a malformed envelope
            return

        if not isinstance(data, dict):
            return

        status = data.get('status')
        if status is not None and str(status) != '1':
            message = data.get('message') or 'NOTOK'
            result = data.get('result')
            if isinstance(result, str) and result:
                message = f"{message} - {result}"
            logger.error(f"Explorer API error: {message}")
            raise ExplorerRejected(message)

        result = data.get('result')
        if isinstance(result, list) and result and isinstance(result[0], dict):
            if result[0].get('SourceCode') == '':
                raise ExplorerRejected("contract source code not verified")


def fetch(
    config: ChainConfig,
    address: str,
    api_key: str,
    timeout: float = DEFAULT_TIMEOUT,
) -> ExplorerResponse:
    return ExplorerClient(api_key, timeout=timeout).fetch_source(config, address)
