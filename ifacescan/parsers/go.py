import structlog
import tree_sitter_go
from tree_sitter import Language, Node, Parser, Tree

from ifacescan.errors import ParseError
from ifacescan.models import (
    InterfaceSpec,
    MethodSignature,
    ReceiverMethod,
    TypeDeclaration,
    UnitDeclarations,
)

logger = structlog.get_logger(__name__)

GO_LANGUAGE = Language(tree_sitter_go.language())

# Interface members that name a method. Older grammars call it method_spec.
_METHOD_MEMBER_TYPES = ("method_elem", "method_spec")

# Both plain and alias type declarations can bind a name to an interface body.
_TYPE_SPEC_TYPES = ("type_spec", "type_alias")

# Predeclared identifiers that denote interface types.
_PREDECLARED_INTERFACES = frozenset({"any", "comparable", "error"})

_PREDECLARED_TYPES = frozenset({
    "bool", "byte", "complex64", "complex128", "float32", "float64",
    "int", "int8", "int16", "int32", "int64", "rune", "string",
    "uint", "uint8", "uint16", "uint32", "uint64", "uintptr",
}) | _PREDECLARED_INTERFACES


def _text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def _type_shape(node: Node) -> str:
    """Whitespace-normalized source text of a type expression."""
    return " ".join(_text(node).split())


def _first_error(node: Node) -> Node | None:
    """Depth-first search for the first ERROR or MISSING node."""
    if node.is_error or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _unwrap_parens(node: Node | None) -> Node | None:
    while node is not None and node.type == "parenthesized_type":
        inner = node.named_children
        node = inner[0] if inner else None
    return node


class _SignatureReader:
    """Turns parameter and result lists into type-shape tuples."""

    @staticmethod
    def params(node: Node | None) -> tuple[str, ...]:
        if node is None:
            return ()
        shapes: list[str] = []
        for child in node.named_children:
            if child.type == "parameter_declaration":
                type_node = child.child_by_field_name("type")
                if type_node is None:
                    continue
                names = child.children_by_field_name("name")
                shapes.extend([_type_shape(type_node)] * max(len(names), 1))
            elif child.type == "variadic_parameter_declaration":
                type_node = child.child_by_field_name("type")
                if type_node is not None:
                    shapes.append("..." + _type_shape(type_node))
        return tuple(shapes)

    @classmethod
    def results(cls, node: Node | None) -> tuple[str, ...]:
        if node is None:
            return ()
        if node.type == "parameter_list":
            return cls.params(node)
        return (_type_shape(node),)

    @classmethod
    def signature(cls, node: Node) -> MethodSignature | None:
        name = _text(node.child_by_field_name("name"))
        if not name:
            return None
        return MethodSignature(
            name=name,
            params=cls.params(node.child_by_field_name("parameters")),
            results=cls.results(node.child_by_field_name("result")),
        )


class GoParser:
    """Extracts interfaces, named types and receiver methods from Go source."""

    def parse(self, source: bytes) -> Tree:
        """Parse Go source into a syntax tree, raising ParseError on any
        syntax error."""
        tree = Parser(GO_LANGUAGE).parse(source)
        root = tree.root_node
        if root.has_error:
            bad = _first_error(root) or root
            if bad.is_missing:
                message = f"missing {bad.type}"
            else:
                snippet = _text(bad).strip().split("\n")[0][:40]
                message = f"syntax error near {snippet!r}" if snippet else "syntax error"
            raise ParseError(
                message,
                line=bad.start_point[0] + 1,
                column=bad.start_point[1] + 1,
            )
        return tree

    def extract_interfaces(self, source: bytes) -> dict[str, InterfaceSpec]:
        tree = self.parse(source)
        interfaces: dict[str, InterfaceSpec] = {}
        self._collect_interfaces(tree.root_node, interfaces)
        return interfaces

    def extract_declarations(self, source: bytes) -> UnitDeclarations:
        tree = self.parse(source)
        unit = UnitDeclarations()

        for node in tree.root_node.named_children:
            if node.type == "type_declaration":
                for spec in node.named_children:
                    if spec.type in _TYPE_SPEC_TYPES:
                        self._read_type_spec(spec, unit)
            elif node.type == "method_declaration":
                method = self._read_method(node)
                if method is not None:
                    unit.methods.append(method)

        return unit

    def _collect_interfaces(self, node: Node, interfaces: dict[str, InterfaceSpec]):
        # Interfaces may be declared inside function bodies too.
        for child in node.named_children:
            if child.type in _TYPE_SPEC_TYPES:
                spec = self._interface_from_spec(child)
                if spec is not None:
                    # Last declaration wins and takes the later position.
                    interfaces.pop(spec.name, None)
                    interfaces[spec.name] = spec
            self._collect_interfaces(child, interfaces)

    def _interface_from_spec(self, spec: Node) -> InterfaceSpec | None:
        type_node = spec.child_by_field_name("type")
        if type_node is None or type_node.type != "interface_type":
            return None
        name = _text(spec.child_by_field_name("name"))
        if not name:
            return None

        methods: list[MethodSignature] = []
        seen: set[str] = set()
        for member in type_node.named_children:
            # Embedded interfaces and type-set elements have no method name.
            if member.type not in _METHOD_MEMBER_TYPES:
                continue
            sig = _SignatureReader.signature(member)
            if sig is not None and sig.name not in seen:
                seen.add(sig.name)
                methods.append(sig)
        return InterfaceSpec(name=name, methods=tuple(methods))

    def _read_type_spec(self, spec: Node, unit: UnitDeclarations):
        interface = self._interface_from_spec(spec)
        if interface is not None:
            unit.interfaces.pop(interface.name, None)
            unit.interfaces[interface.name] = interface
            return
        name = _text(spec.child_by_field_name("name"))
        type_node = _unwrap_parens(spec.child_by_field_name("type"))
        if not name or type_node is None:
            return
        kind, target = self._classify_underlying(type_node)
        unit.types.append(TypeDeclaration(name=name, kind=kind, target=target))

    @staticmethod
    def _classify_underlying(type_node: Node) -> tuple[str, str]:
        """Kind of a declared type plus the type name it refers to, if any.

        Definitions and aliases over another named type get kind "named";
        whether that type is concrete is only known once the scan is done.
        Predeclared interfaces such as `error` are known to be "interface".
        """
        if type_node.type == "struct_type":
            return "struct", ""
        if type_node.type == "generic_type":
            type_node = type_node.child_by_field_name("type") or type_node
        if type_node.type == "qualified_type":
            return "named", _type_shape(type_node)
        if type_node.type == "type_identifier":
            target = _text(type_node)
            if target in _PREDECLARED_INTERFACES:
                return "interface", target
            if target not in _PREDECLARED_TYPES:
                return "named", target
        return "other", ""

    def _read_method(self, node: Node) -> ReceiverMethod | None:
        receiver = node.child_by_field_name("receiver")
        signature = _SignatureReader.signature(node)
        if receiver is None or signature is None:
            return None

        for param in receiver.named_children:
            if param.type != "parameter_declaration":
                continue
            owner, pointer = self._resolve_owner(param.child_by_field_name("type"))
            if owner:
                return ReceiverMethod(owner=owner, signature=signature, pointer=pointer)
            logger.debug(
                "receiver_unresolved",
                method=signature.name,
                receiver=_text(param),
            )
        return None

    @staticmethod
    def _resolve_owner(type_node: Node | None) -> tuple[str, bool]:
        """Resolve a receiver type to its owner name.

        Exactly one level of pointer indirection is unwrapped, so `T` and `*T`
        both resolve to `T` while `**T` resolves to nothing.
        """
        node = _unwrap_parens(type_node)
        pointer = False
        if node is not None and node.type == "pointer_type":
            pointer = True
            inner = node.named_children
            node = _unwrap_parens(inner[0] if inner else None)
        if node is not None and node.type == "generic_type":
            node = node.child_by_field_name("type")
        if node is None or node.type != "type_identifier":
            return "", pointer
        return _text(node), pointer
