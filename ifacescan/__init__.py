"""ifacescan: find the types that structurally implement Go interfaces."""

from ifacescan.models import (
    AnalysisResult,
    CollectionResult,
    ConformanceResult,
    FileDiagnostic,
    InterfaceSpec,
    MethodSignature,
    TypeCandidate,
)
from ifacescan.errors import (
    AnalysisError,
    ParseError,
    SourceReadError,
    WalkError,
)
from ifacescan.analyzer import analyze
from ifacescan.collector import collect_candidates
from ifacescan.extractor import extract_interfaces
from ifacescan.matcher import match
from ifacescan.languages import Language
from ifacescan.parsers import Parser

__all__ = [
    "analyze",
    "extract_interfaces",
    "collect_candidates",
    "match",
    "Language",
    "Parser",
    "MethodSignature",
    "InterfaceSpec",
    "TypeCandidate",
    "ConformanceResult",
    "FileDiagnostic",
    "CollectionResult",
    "AnalysisResult",
    "AnalysisError",
    "ParseError",
    "SourceReadError",
    "WalkError",
]
