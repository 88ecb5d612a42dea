"""remappings.txt generation for sources written under src/."""

from typing import Dict, Iterable, List

from ..models import SourceFile


def _retarget(remapping: str, sources_dir: str) -> str:
    prefix, _, target = remapping.partition('=')
    target = target.strip()
    while target.startswith('./'):
        target = target[2:]
    return f"{prefix.strip()}={sources_dir}/{target}"


def build_remappings(
    files: Iterable[SourceFile],
    original: Iterable[str] = (),
    sources_dir: str = 'src',
) -> List[str]:
    """
    Build remappings so imports written against the explorer layout resolve.

    Every top-level directory of the fetched sources is mapped to its copy
    under `sources_dir`; remappings declared in the standard JSON input are
    kept but retargeted under `sources_dir` and win over generated ones.

    Args:
        files: Normalized source files
        original: Remappings from the compiler settings, e.g. "@oz/=lib/oz/"
        sources_dir: Directory the sources are written into

    Returns:
        Sorted remapping lines (empty when all files are top-level)
    """
    remappings: Dict[str, str] = {}

    for source in files:
        head, sep, _ = source.relative_path.partition('/')
        if sep:
            remappings[f"{head}/"] = f"{head}/={sources_dir}/{head}/"

    for line in original:
        if '=' not in line:
            continue
        retargeted = _retarget(line, sources_dir)
        remappings[retargeted.partition('=')[0]] = retargeted

    return [remappings[key] for key in sorted(remappings)]
