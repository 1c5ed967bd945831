"""Conformance matcher: which candidate types satisfy which interfaces."""

from typing import Mapping

from ifacescan.models import ConformanceResult, InterfaceSpec, TypeCandidate


def implements(
    interface: InterfaceSpec,
    candidate: TypeCandidate,
    strict: bool = False,
) -> bool:
    """True if the candidate's method set covers every required method.

    By default methods are compared by name only. With `strict`, parameter and
    result type shapes must match as well.
    """
    for required in interface.methods:
        found = candidate.methods.get(required.name)
        if found is None:
            return False
        if strict and found.shape() != required.shape():
            return False
    return True


def match(
    interfaces: Mapping[str, InterfaceSpec],
    candidates: Mapping[str, TypeCandidate],
    strict: bool = False,
    structs_only: bool = False,
) -> list[ConformanceResult]:
    """Match every interface against every candidate.

    Interfaces are visited in declaration order and candidates in discovery
    order, so implementor lists are reproducible. An interface without
    methods is satisfied by every candidate. Interfaces nobody implements
    are left out of the result.

    Args:
        interfaces: Interfaces keyed by name, in declaration order.
        candidates: Candidate types keyed by name, in discovery order.
        strict: Compare full signatures instead of method names.
        structs_only: Only consider types declared as structs in the scan.
    """
    pool = [
        c for c in candidates.values()
        if not structs_only or c.kind == "struct"
    ]

    found: dict[str, ConformanceResult] = {}
    for interface in interfaces.values():
        for candidate in pool:
            if not implements(interface, candidate, strict=strict):
                continue
            if interface.name not in found:
                found[interface.name] = ConformanceResult(
                    interface_name=interface.name,
                    methods=interface.method_names,
                )
            found[interface.name].implementations.append(candidate.name)

    return list(found.values())
