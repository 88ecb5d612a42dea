"""Resolve -> fetch -> normalize -> materialize."""

import logging
from pathlib import Path
from typing import Optional

from .chains import resolve
from .clients import ExplorerClient, validate_address
from .config import Settings, get_api_key
from .extraction import normalize
from .materialize import ensure_destination_available, materialize
from .models import CloneResult

logger = logging.getLogger(__name__)


def clone_contract(
    chain: str,
    address: str,
    destination,
    api_key: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> CloneResult:
    """
    Clone a verified contract into a new Foundry project.

    The first failing stage aborts the run by raising its ContractClonerError.
    Configuration, address and destination are checked before any request is
    sent.

    Args:
        chain: Chain alias or numeric chain id
        address: Contract address
        destination: Directory for the new project
        api_key: Explicit API key; defaults to the chain's environment variable
        settings: Runtime settings; defaults to Settings.from_env()

    Returns:
        CloneResult describing the written project
    """
    settings = settings or Settings.from_env()
    destination = Path(destination)

    config = resolve(chain)
    logger.info(f"Chain id: {config.chain_id} ({config.name})")

    key = get_api_key(config, api_key)
    validate_address(address)
    ensure_destination_available(destination)

    logger.info(f"Cloning contract at address {address} to path {destination}")

    client = ExplorerClient(key, timeout=settings.timeout)
    response = client.fetch_source(config, address)

    source = normalize(response)
    if source.metadata.compiler_version:
        logger.info(f"Compiler: {source.metadata.compiler_version}")

    written = materialize(
        source.files,
        destination,
        init=settings.init_project,
        metadata=source.metadata,
        forge_binary=settings.forge_binary,
        init_args=settings.init_args,
    )

    logger.info("Contract cloning completed successfully!")
    return CloneResult(
        destination=destination,
        chain=config,
        address=address,
        files_written=written,
        initialized=settings.init_project,
    )
