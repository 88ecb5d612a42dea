"""Write normalized sources into a new Foundry project."""

import logging
import subprocess
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..errors import InitFailed, IoFailure, PathExists
from ..models import ContractMetadata, SourceFile
from .remappings import build_remappings

logger = logging.getLogger(__name__)

SOURCES_DIR = 'src'
DEFAULT_FORGE_BINARY = 'forge'
DEFAULT_INIT_ARGS = ('--no-commit',)

# Files `forge init` drops into a fresh project
TEMPLATE_FILES = (
    'src/Counter.sol',
    'test/Counter.t.sol',
    'script/Counter.s.sol',
)


def ensure_destination_available(destination: Path) -> None:
    """Raise PathExists unless destination is absent or an empty directory."""
    destination = Path(destination)
    if not destination.exists():
        return
    if not destination.is_dir() or any(destination.iterdir()):
        raise PathExists(destination)


def _write_text(path: Path, contents: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(contents)
    except OSError as e:
        raise IoFailure(path, e)


def write_sources(files: Iterable[SourceFile], destination: Path) -> List[Path]:
    sources_root = destination / SOURCES_DIR
    written = []
    for source in files:
        file_path = sources_root / source.relative_path
        logger.info(f"Creating file: {file_path}")
        _write_text(file_path, source.contents)
        written.append(file_path)
    return written


def write_remappings(
    files: Sequence[SourceFile],
    destination: Path,
    metadata: Optional[ContractMetadata] = None,
) -> Optional[Path]:
    original = metadata.remappings if metadata else []
    lines = build_remappings(files, original, SOURCES_DIR)
    if not lines:
        return None

    path = destination / 'remappings.txt'
    _write_text(path, '\n'.join(lines) + '\n')
    logger.info(f"Wrote {len(lines)} remapping(s) to {path}")
    return path


def run_forge_init(
    destination: Path,
    forge_binary: str = DEFAULT_FORGE_BINARY,
    init_args: Sequence[str] = DEFAULT_INIT_ARGS,
) -> None:
    """
    Run `forge init` inside destination.

    Raises:
        InitFailed: forge exited non-zero or could not be started (code 127)
    """
    command = [forge_binary, 'init', *init_args, '.']
    logger.info(f"Initializing forge project: {' '.join(command)}")

    try:
        completed = subprocess.run(
            command,
            cwd=destination,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        raise InitFailed(127, f"'{forge_binary}' not found on PATH")
    except OSError as e:
        raise InitFailed(126, str(e))

    if completed.returncode != 0:
        stderr = (completed.stderr or '').strip()
        detail = stderr.splitlines()[-1] if stderr else None
        logger.error(f"Failed to initialize forge project: {stderr}")
        raise InitFailed(completed.returncode, detail)

    logger.info("Initialized forge project")


def remove_template_files(destination: Path) -> List[Path]:
    removed = []
    for relative in TEMPLATE_FILES:
        path = destination / relative
        if path.is_file():
            logger.info(f"Removing Counter file: {path}")
            try:
                path.unlink()
            except OSError as e:
                raise IoFailure(path, e)
            removed.append(path)
    return removed


def materialize(
    files: Sequence[SourceFile],
    destination,
    init: bool = True,
    metadata: Optional[ContractMetadata] = None,
    forge_binary: str = DEFAULT_FORGE_BINARY,
    init_args: Sequence[str] = DEFAULT_INIT_ARGS,
) -> List[Path]:
    """
    Materialize source files as a Foundry project.

    `forge init` runs in the still-empty destination and its template files
    are removed before the sources land under `<destination>/src/`. Files
    already written are left in place if a later step fails.

    Args:
        files: Normalized source files
        destination: Project directory; must be absent or empty
        init: Run `forge init` before writing the sources
        metadata: Contract metadata (remappings from standard JSON input)
        forge_binary: forge executable name or path
        init_args: Extra `forge init` arguments

    Returns:
        Paths of the written source files

    Raises:
        PathExists: destination exists and is not an empty directory
        IoFailure: a file or directory could not be written
        InitFailed: `forge init` failed
    """
    destination = Path(destination)
    ensure_destination_available(destination)

    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise IoFailure(destination, e)
    logger.info(f"Created directory: {destination}")

    if init:
        run_forge_init(destination, forge_binary, init_args)
        remove_template_files(destination)

    written = write_sources(files, destination)
    write_remappings(files, destination, metadata)
    return written
