from dataclasses import dataclass, field


@dataclass(frozen=True)
class MethodSignature:
    """A method's name plus the shapes of its parameter and result types."""
    name: str
    params: tuple[str, ...] = ()
    results: tuple[str, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.params)

    def shape(self) -> tuple[str, tuple[str, ...], tuple[str, ...]]:
        return (self.name, self.params, self.results)


@dataclass(frozen=True)
class InterfaceSpec:
    """An interface declaration and the methods it requires, in order."""
    name: str
    methods: tuple[MethodSignature, ...] = ()

    @property
    def method_names(self) -> list[str]:
        return [m.name for m in self.methods]


@dataclass
class TypeDeclaration:
    """A named type declared in a source unit without an interface body."""
    name: str
    kind: str  # "struct", "named", "interface" or "other"
    target: str = ""  # referenced type name when kind is "named"


@dataclass
class ReceiverMethod:
    """A method declaration bound to an owner type through its receiver."""
    owner: str
    signature: MethodSignature
    pointer: bool = False


@dataclass
class UnitDeclarations:
    """Everything the collector needs from one parsed source unit."""
    interfaces: dict[str, InterfaceSpec] = field(default_factory=dict)
    types: list[TypeDeclaration] = field(default_factory=list)
    methods: list[ReceiverMethod] = field(default_factory=list)


@dataclass
class TypeCandidate:
    """A concrete type and the methods attached to it across the scan."""
    name: str
    methods: dict[str, MethodSignature] = field(default_factory=dict)
    kind: str | None = None
    path: str = ""
    target: str = ""

    @property
    def method_names(self) -> list[str]:
        return list(self.methods)

    def add_method(self, signature: MethodSignature) -> None:
        # Method sets are unique by name; the first declaration wins.
        self.methods.setdefault(signature.name, signature)


@dataclass
class ConformanceResult:
    """An interface and the types found to implement it."""
    interface_name: str
    methods: list[str] = field(default_factory=list)
    implementations: list[str] = field(default_factory=list)


@dataclass
class FileDiagnostic:
    """A source unit that was skipped during the scan, and why."""
    path: str
    message: str
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        if self.line is None:
            return f"{self.path}: {self.message}"
        return f"{self.path}:{self.line}:{self.column}: {self.message}"


@dataclass
class CollectionResult:
    """Candidates collected from a directory tree plus per-file diagnostics."""
    candidates: dict[str, TypeCandidate] = field(default_factory=dict)
    diagnostics: list[FileDiagnostic] = field(default_factory=list)
    files_scanned: int = 0


@dataclass
class AnalysisResult:
    """Complete outcome of one declaration-file / scan-root analysis."""
    interfaces: dict[str, InterfaceSpec] = field(default_factory=dict)
    results: list[ConformanceResult] = field(default_factory=list)
    diagnostics: list[FileDiagnostic] = field(default_factory=list)
    files_scanned: int = 0
    candidates_found: int = 0
