"""Block explorer API clients."""

from .explorer import DEFAULT_TIMEOUT, ExplorerClient, fetch, validate_address

__all__ = ["DEFAULT_TIMEOUT", "ExplorerClient", "fetch", "validate_address"]
