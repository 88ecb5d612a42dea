"""Clone verified explorer contracts into local Foundry projects."""

from .pipeline import clone_contract

__version__ = "0.1.0"

__all__ = ["__version__", "clone_contract"]
