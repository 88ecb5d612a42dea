"""Runtime settings and API key lookup."""

import logging
import os
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .clients import DEFAULT_TIMEOUT
from .errors import ConfigurationError, MissingApiKey
from .materialize.project import DEFAULT_FORGE_BINARY, DEFAULT_INIT_ARGS
from .models import ChainConfig

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    forge_binary: str = DEFAULT_FORGE_BINARY
    init_args: Tuple[str, ...] = DEFAULT_INIT_ARGS
    init_project: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from CLONER_TIMEOUT / FORGE_BIN, falling back to defaults."""
        timeout = os.getenv('CLONER_TIMEOUT')
        try:
            timeout = float(timeout) if timeout else DEFAULT_TIMEOUT
        except ValueError:
            raise ConfigurationError(f"CLONER_TIMEOUT must be a number of seconds, got {timeout!r}")
        if timeout <= 0:
            raise ConfigurationError(f"CLONER_TIMEOUT must be positive, got {timeout}")

        return cls(
            timeout=timeout,
            forge_binary=os.getenv('FORGE_BIN') or DEFAULT_FORGE_BINARY,
        )


def get_api_key(config: ChainConfig, override: Optional[str] = None) -> str:
    """
    Return the API key for the chain.

    Only the chain's own variable is consulted (ETHERSCAN_API_KEY for Etherscan
    chains, BASESCAN_API_KEY for Base); an explicit override wins.

    Raises:
        MissingApiKey: no override given and the variable is unset or blank
    """
    if override:
        return override

    api_key = os.getenv(config.api_key_env_var, '').strip()
    if not api_key:
        raise MissingApiKey(config.api_key_env_var)

    logger.debug(f"Using API key from {config.api_key_env_var}")
    return api_key
