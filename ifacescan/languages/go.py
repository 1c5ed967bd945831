"""Go language plugin."""

from ifacescan.models import InterfaceSpec, UnitDeclarations
from ifacescan.parsers.go import GoParser


class GoLanguage:
    """Go language support for extraction and collection."""

    name = "go"
    suffixes = [".go"]
    ignore_dirs = {"vendor", "testdata"}

    def __init__(self):
        self._parser = GoParser()

    def extract_interfaces(self, source: bytes) -> dict[str, InterfaceSpec]:
        return self._parser.extract_interfaces(source)

    def extract_declarations(self, source: bytes) -> UnitDeclarations:
        return self._parser.extract_declarations(source)
