"""Package manifest model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

CORE_PACKAGE_TYPE = "dncore"


class Manifest(BaseModel):
    """A package manifest (``dappnode_package.json``).

    Only the fields the audit needs are typed; everything else is kept
    as extra data.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    dnp_name: str = Field(alias="name", description="Package name")
    version: str = Field(default="0.0.0", description="Package version")
    type: str | None = Field(default=None, description="Package type (dncore, service, library)")
    description: str | None = Field(default=None, description="Short description")
    upstream_version: str | None = Field(
        default=None,
        alias="upstreamVersion",
        description="Version of the upstream software",
    )

    @property
    def is_core(self) -> bool:
        """Core packages run with elevated privileges on the host."""
        return self.type == CORE_PACKAGE_TYPE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Manifest":
        return cls.model_validate(data)
