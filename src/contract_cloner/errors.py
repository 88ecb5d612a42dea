"""Error taxonomy for the clone pipeline.

Every stage raises a subclass of ContractClonerError. Each class carries the
stage label printed by the CLI and the process exit code for its failure class.

Exit codes:
    2  configuration / input (unknown chain, missing API key, bad address)
    3  network failure (transport error, timeout, non-2xx status)
    4  explorer rejected the request (NOTOK, unverified contract)
    5  response payload could not be turned into source files
    6  filesystem failure (destination exists, write error)
    7  project initialization tool failed
"""

from typing import Optional


class ContractClonerError(Exception):
    """Base error for all clone pipeline failures."""

    stage = "clone"
    exit_code = 1

    @property
    def kind(self) -> str:
        return type(self).__name__


# Resolution

class ResolutionError(ContractClonerError):
    stage = "resolve"
    exit_code = 2


class UnknownChain(ResolutionError):
    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"unknown chain '{identifier}'")


# Configuration

class ConfigurationError(ContractClonerError):
    stage = "config"
    exit_code = 2


class MissingApiKey(ConfigurationError):
    def __init__(self, env_var: str):
        self.env_var = env_var
        super().__init__(f"{env_var} environment variable not set")


# Fetching

class FetchError(ContractClonerError):
    stage = "fetch"
    exit_code = 3


class InvalidAddress(FetchError):
    exit_code = 2

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"'{address}' is not a 0x-prefixed 20-byte hex address")


class NetworkError(FetchError):
    def __init__(self, cause):
        self.cause = cause
        super().__init__(f"request failed: {cause}")


class ExplorerRejected(FetchError):
    exit_code = 4

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# Parsing

class ParseError(ContractClonerError):
    stage = "parse"
    exit_code = 5


class EmptySource(ParseError):
    def __init__(self, message: str = "explorer response contains no source files"):
        super().__init__(message)


class UnsafePath(ParseError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"source path '{path}' escapes the project root")


class MalformedEnvelope(ParseError):
    pass


# Materializing

class MaterializeError(ContractClonerError):
    stage = "materialize"
    exit_code = 6


class PathExists(MaterializeError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"destination {path} already exists and is not empty")


class IoFailure(MaterializeError):
    def __init__(self, path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"could not write {path}: {cause}")


class InitFailed(MaterializeError):
    exit_code = 7

    def __init__(self, code: int, detail: Optional[str] = None):
        self.code = code
        self.detail = detail
        message = f"project initialization exited with code {code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
