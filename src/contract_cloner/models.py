"""Structured models passed between the clone pipeline stages."""

from pathlib import Path
from typing import List, Literal, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

SourceShape = Literal["flat", "multi_file", "standard_json"]


class ChainTarget(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")
    identifier: str


class ChainConfig(BaseModel):
    """Explorer endpoint and API key variable for one chain."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    chain_id: int
    name: str
    api_base_url: str
    api_key_env_var: str

    @field_validator("api_base_url")
    @classmethod
    def validate_https(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme != "https" or not parsed.netloc:
            raise ValueError(f"explorer URL must be an https origin, got {value!r}")
        return value


class ExplorerResponse(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    body: str
    status_code: int = 200
    chain_id: Optional[int] = None
    address: Optional[str] = None


class SourceFile(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    relative_path: str
    contents: str


class ContractMetadata(BaseModel):
    """Compiler metadata reported next to the source in the explorer envelope."""

    model_config = ConfigDict(frozen=True)

    contract_name: str = ""
    compiler_version: str = ""
    optimization_used: bool = False
    runs: Optional[int] = None
    evm_version: Optional[str] = None
    license_type: Optional[str] = None
    remappings: List[str] = Field(default_factory=list)

    @property
    def is_vyper(self) -> bool:
        return self.compiler_version.lower().startswith("vyper")


class NormalizedSource(BaseModel):
    model_config = ConfigDict(frozen=True)

    files: List[SourceFile]
    metadata: ContractMetadata = Field(default_factory=ContractMetadata)
    shape: SourceShape = "flat"


class CloneResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    destination: Path
    chain: ChainConfig
    address: str
    files_written: List[Path] = Field(default_factory=list)
    initialized: bool = False
