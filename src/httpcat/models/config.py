"""Pydantic configuration models for the httpcat protocol stack."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class StackConfig(BaseModel):
    """
    Configuration applied once when a Stack is built.

    Example:
        config = StackConfig(host="https://api.example.com", log_level=2)
        stack = Stack(config)

    YAML format:
        host: https://api.example.com
        log_level: 2
        cookie_jar: true
        read_timeout: 30
    """

    log_level: int = Field(
        0,
        ge=0,
        le=3,
        description="Wire dump verbosity logged at DEBUG: 0 silent, 1 requests, 2 responses, 3 bodies",
    )
    host: Optional[str] = Field(
        None,
        description="Default host prefixed to request URIs that carry no scheme",
    )
    memento: bool = Field(False, description="Buffer the response payload into the context")
    insecure_tls: bool = Field(False, description="Disable TLS certificate validation")
    cookie_jar: bool = Field(False, description="Keep cookies across requests of the stack")
    redirects: bool = Field(False, description="Follow redirects instead of returning 3xx")
    connect_timeout: float = Field(10.0, gt=0, description="Connection timeout in seconds")
    read_timeout: float = Field(60.0, gt=0, description="Read timeout in seconds")
    pool_size: int = Field(100, ge=1, description="Connections kept per host pool")
    user_agent: Optional[str] = Field(None, description="Default User-Agent header")

    model_config = {"extra": "forbid"}

    @property
    def timeout(self) -> tuple[float, float]:
        """(connect, read) timeout pair as accepted by requests."""
        return (self.connect_timeout, self.read_timeout)

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "StackConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "StackConfig":
        """Load config from YAML file."""
        return cls.from_yaml(Path(path).read_text())
