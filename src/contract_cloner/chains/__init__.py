"""Chain alias / chain id resolution."""

from .constants import CHAIN_ALIASES, EXPLORERS
from .resolver import config_for_chain_id, resolve, supported_aliases

__all__ = [
    "CHAIN_ALIASES",
    "EXPLORERS",
    "config_for_chain_id",
    "resolve",
    "supported_aliases",
]
