"""Foundry project materialization."""

from .project import (
    SOURCES_DIR,
    TEMPLATE_FILES,
    ensure_destination_available,
    materialize,
    remove_template_files,
    run_forge_init,
)
from .remappings import build_remappings

__all__ = [
    "SOURCES_DIR",
    "TEMPLATE_FILES",
    "build_remappings",
    "ensure_destination_available",
    "materialize",
    "remove_template_files",
    "run_forge_init",
]
