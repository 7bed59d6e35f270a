"""Pydantic configuration models for httpchain."""

from enum import Enum
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .. import __version__


class TransportName(str, Enum):
    """Built-in transports, listed from most to least capable."""

    REQUESTS = "requests"
    URLLIB = "urllib"
    SOCKET = "socket"


DEFAULT_TRANSPORT_ORDER = [TransportName.REQUESTS, TransportName.URLLIB, TransportName.SOCKET]


class ClientConfig(BaseModel):
    """
    Root configuration model for httpchain.

    Example:
        config = ClientConfig(
            transports=[TransportName.URLLIB, TransportName.SOCKET],
            read_timeout=10,
        )
        client = HttpClient.from_config(config)

    YAML format:
        transports:
          - urllib
          - socket
        read_timeout: 10
        decode_content_encoding: false
    """

    transports: list[TransportName] = Field(
        default_factory=lambda: list(DEFAULT_TRANSPORT_ORDER),
        min_length=1,
        description="Transports to try, in priority order",
    )
    read_timeout: float = Field(5.0, gt=0, description="Read timeout in seconds")
    user_agent: str = Field(
        f"httpchain/{__version__}",
        min_length=1,
        description="User-Agent sent when the request does not set one",
    )
    decode_transfer_encoding: bool = Field(True, description="Undo chunked transfer coding")
    decode_content_encoding: bool = Field(True, description="Undo gzip/deflate content coding")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "WARNING",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    @field_validator("transports")
    @classmethod
    def _no_duplicate_transports(cls, value: list[TransportName]) -> list[TransportName]:
        if len(set(value)) != len(value):
            raise ValueError("Each transport may only be listed once")
        return value

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ClientConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "ClientConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())
