"""Turn a getsourcecode envelope into an ordered list of source files.

The explorer reports contract source in one of three shapes inside the same
`SourceCode` field:

    flat           the whole flattened source as a plain string
    multi_file     JSON text mapping file paths to {"content": ...}
    standard_json  Solidity standard JSON input, usually wrapped in an extra
                   pair of braces ("{{ ... }}")

The shape is found by trial-parsing the field; anything that does not parse
into one of the JSON shapes is treated as a flat file.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional, Tuple, Union

from ..errors import EmptySource, MalformedEnvelope
from ..models import ContractMetadata, ExplorerResponse, NormalizedSource, SourceFile
from .paths import sanitize_path

logger = logging.getLogger(__name__)

DEFAULT_CONTRACT_NAME = "Contract"
_NAME_RE = re.compile(r"^[A-Za-z0-9_$-]+$")


def normalize(body: Union[ExplorerResponse, str]) -> NormalizedSource:
    """
    Parse an explorer response body into source files.

    Args:
        body: ExplorerResponse or the raw JSON text of the response

    Returns:
        NormalizedSource with files in payload order plus compiler metadata

    Raises:
        MalformedEnvelope: body is not the expected JSON envelope
        EmptySource: no source files could be produced
        UnsafePath: a file path would escape the project root
    """
    text = body.body if isinstance(body, ExplorerResponse) else body

    entry = _parse_envelope(text)
    metadata = _extract_metadata(entry)
    source_code = entry['SourceCode']

    document = _trial_parse(source_code)
    if document is not None and isinstance(document.get('sources'), dict):
        shape = 'standard_json'
        raw_files = _files_from_map(document['sources'])
        metadata = metadata.model_copy(update={'remappings': _remappings(document)})
    elif document is not None and _is_file_map(document):
        shape = 'multi_file'
        raw_files = _files_from_map(document)
    else:
        shape = 'flat'
        if not source_code.strip():
            raise EmptySource("contract source code is empty; the contract might not be verified")
        raw_files = [(flat_filename(metadata), source_code)]

    if not raw_files:
        raise EmptySource()

    files = []
    seen = set()
    for raw_path, contents in raw_files:
        path = sanitize_path(raw_path)
        if path in seen:
            raise MalformedEnvelope(f"duplicate source path '{path}'")
        seen.add(path)
        files.append(SourceFile(relative_path=path, contents=contents))

    logger.info(f"Normalized {len(files)} source file(s) ({shape}) for {metadata.contract_name or 'unnamed contract'}")
    return NormalizedSource(files=files, metadata=metadata, shape=shape)


def flat_filename(metadata: ContractMetadata) -> str:
    name = metadata.contract_name.strip()
    if not _NAME_RE.match(name):
        name = DEFAULT_CONTRACT_NAME
    extension = '.vy' if metadata.is_vyper else '.sol'
    return f"{name}{extension}"


def _parse_envelope(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise MalformedEnvelope(f"response is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise MalformedEnvelope("response is not a JSON object")

    result = data.get('result')
    if not isinstance(result, list):
        raise MalformedEnvelope("response has no result array")
    if not result:
        raise EmptySource("explorer returned an empty result array")

    entry = result[0]
    if not isinstance(entry, dict):
        raise MalformedEnvelope("first result entry is not an object")
    if not isinstance(entry.get('SourceCode'), str):
        raise MalformedEnvelope("result entry has no SourceCode string")
    return entry


def _extract_metadata(entry: Dict[str, Any]) -> ContractMetadata:
    runs = entry.get('Runs')
    try:
        runs = int(runs) if runs not in (None, '') else None
    except (TypeError, ValueError):
        runs = None

    evm_version = entry.get('EVMVersion')
    if not isinstance(evm_version, str) or not evm_version or evm_version.lower() == 'default':
        evm_version = None

    license_type = entry.get('LicenseType')
    if not isinstance(license_type, str) or not license_type:
        license_type = None

    return ContractMetadata(
        contract_name=str(entry.get('ContractName') or ''),
        compiler_version=str(entry.get('CompilerVersion') or ''),
        optimization_used=str(entry.get('OptimizationUsed', '0')) == '1',
        runs=runs,
        evm_version=evm_version,
        license_type=license_type,
    )


def _trial_parse(source_code: str) -> Optional[Dict[str, Any]]:
    """Return the embedded JSON document, or None when the field is plain source."""
    text = source_code.strip()
    if text.startswith('{{') and text.endswith('}}'):
        text = text[1:-1]
    if not text.startswith('{'):
        return None

    try:
        document = json.loads(text)
    except ValueError:
        logger.debug("SourceCode looks like JSON but does not parse; treating as flat source")
        return None

    return document if isinstance(document, dict) else None


def _is_file_map(document: Dict[str, Any]) -> bool:
    return all(
        isinstance(value, dict) and isinstance(value.get('content'), str)
        for value in document.values()
    )


def _files_from_map(sources: Dict[str, Any]) -> List[Tuple[str, str]]:
    files = []
    for path, entry in sources.items():
        if not isinstance(entry, dict) or not isinstance(entry.get('content'), str):
            raise MalformedEnvelope(f"source entry '{path}' has no content string")
        files.append((path, entry['content']))
    return files


def _remappings(document: Dict[str, Any]) -> List[str]:
    settings = document.get('settings')
    if not isinstance(settings, dict):
        return []
    remappings = settings.get('remappings') or []
    return [r for r in remappings if isinstance(r, str)]
