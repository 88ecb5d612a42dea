"""Map a user-supplied chain token to its explorer configuration."""

import logging
import re
from typing import List, Union

from ..errors import UnknownChain
from ..models import ChainConfig, ChainTarget
from .constants import CHAIN_ALIASES, EXPLORERS

logger = logging.getLogger(__name__)

_CHAIN_ID_RE = re.compile(r"^[0-9]+$")


def supported_aliases() -> List[str]:
    return sorted(CHAIN_ALIASES)


def config_for_chain_id(chain_id: int) -> ChainConfig:
    if chain_id not in EXPLORERS:
        raise UnknownChain(str(chain_id))
    name, api_base_url, key_var = EXPLORERS[chain_id]
    return ChainConfig(
        chain_id=chain_id,
        name=name,
        api_base_url=api_base_url,
        api_key_env_var=key_var,
    )


def resolve(identifier: Union[str, ChainTarget]) -> ChainConfig:
    """
    Resolve a chain alias or numeric chain id.

    Args:
        identifier: Alias ("eth", "base", any case) or a decimal chain id

    Returns:
        ChainConfig for the chain's explorer

    Raises:
        UnknownChain: alias not known, or chain id missing from EXPLORERS
    """
    if isinstance(identifier, ChainTarget):
        identifier = identifier.identifier

    token = identifier.strip()
    alias = token.lower()

    if alias in CHAIN_ALIASES:
        chain_id = CHAIN_ALIASES[alias]
        logger.debug(f"Chain alias '{alias}' -> chain id {chain_id}")
        return config_for_chain_id(chain_id)

    if _CHAIN_ID_RE.match(token):
        chain_id = int(token)
        if chain_id not in EXPLORERS:
            raise UnknownChain(identifier)
        return config_for_chain_id(chain_id)

    raise UnknownChain(identifier)
