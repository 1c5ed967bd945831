"""Language protocol: everything specific to one source language."""

from typing import Protocol

from ifacescan.models import InterfaceSpec, UnitDeclarations


class Language(Protocol):
    """Everything the extractor and collector need to know about a language.

    Implement this to add support for a new structurally-typed language.
    """

    name: str
    suffixes: list[str]
    ignore_dirs: set[str]

    def extract_interfaces(self, source: bytes) -> dict[str, InterfaceSpec]:
        """Extract interface declarations from source code.
        Used by the declaration extractor."""
        ...

    def extract_declarations(self, source: bytes) -> UnitDeclarations:
        """Extract named types and receiver methods from source code.
        Used by the candidate collector."""
        ...
