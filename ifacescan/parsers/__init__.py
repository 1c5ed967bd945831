from typing import Protocol

from ifacescan.models import InterfaceSpec, UnitDeclarations


class Parser(Protocol):
    """Extracts interface and receiver declarations from source code."""

    def extract_interfaces(self, source: bytes) -> dict[str, InterfaceSpec]:
        """Parse source code and return its interfaces keyed by name.

        Raises ParseError if the source is not syntactically valid.
        """
        ...

    def extract_declarations(self, source: bytes) -> UnitDeclarations:
        """Parse source code and return the type declarations and receiver
        methods it contains.

        Raises ParseError if the source is not syntactically valid.
        """
        ...
