"""Explorer payload normalization."""

from .normalizer import flat_filename, normalize
from .paths import sanitize_path

__all__ = ["flat_filename", "normalize", "sanitize_path"]
