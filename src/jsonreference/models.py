"""Pydantic models shared by the configuration layer and the CLI.

**Configuration models** -- read from ``./jsonref.json`` and environment
variables by :func:`~jsonreference.config.resolve_config`:
    :class:`OutputConfig` and :class:`Settings`.

**Report models** -- produced by ``jsonref inspect``:
    :class:`ReferenceInfo`.

The :class:`~jsonreference.reference.Reference` value type itself is a plain
frozen dataclass; these models only describe it for serialisation.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from jsonreference.reference import Reference


# --- Config ---


class OutputConfig(BaseModel):
    """Output preferences."""

    format: Literal["auto", "json", "plain", "rich"] = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class Settings(BaseModel):
    """Effective configuration after precedence resolution.

    Example ``jsonref.json``::

        {
            "base": "https://example.com/schemas/root.json",
            "output": {"format": "plain"}
        }
    """

    model_config = ConfigDict(extra="forbid")

    base: Optional[str] = Field(
        default=None,
        description="Parent reference used by 'jsonref resolve' when --base is not given",
    )
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Inspect report ---


class ReferenceInfo(BaseModel):
    """Serialisable description of a parsed :class:`Reference`."""

    reference: str
    scheme: str = ""
    host: str = ""
    path: str = ""
    query: str = ""
    fragment: str = ""
    pointer: str = ""
    has_full_url: bool = False
    has_url_path_only: bool = False
    has_fragment_only: bool = False
    has_file_scheme: bool = False
    has_full_file_path: bool = False
    has_only_fragment: bool = False
    is_canonical: bool = False
    is_root: bool = False

    @classmethod
    def from_reference(cls, ref: Reference) -> ReferenceInfo:
        url = ref.url
        return cls(
            reference=str(ref),
            scheme=url.scheme if url else "",
            host=url.host if url else "",
            path=url.path if url else "",
            query=url.raw_query if url else "",
            fragment=url.fragment if url else "",
            pointer=ref.pointer.path,
            has_full_url=ref.has_full_url,
            has_url_path_only=ref.has_url_path_only,
            has_fragment_only=ref.has_fragment_only,
            has_file_scheme=ref.has_file_scheme,
            has_full_file_path=ref.has_full_file_path,
            has_only_fragment=ref.has_only_fragment(),
            is_canonical=ref.is_canonical(),
            is_root=ref.is_root(),
        )
