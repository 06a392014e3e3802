"""Cross-module type registry and import resolution.

Every declaration is registered under the module that first declares it.
Once all modules are compiled, each module imports the types it uses but
does not declare from their registered owners.
"""

from __future__ import annotations

from collections.abc import Container, Iterable, Iterator
from dataclasses import dataclass, field

from onvif_interfaces.declarations import ImportDeclaration


class TypeRegistry:
    """Map of type name -> name of the module that declares it.

    Entries are write-once: the first module to register a name stays its
    owner for the rest of the run.
    """

    def __init__(self) -> None:
        self._owners: dict[str, str] = {}

    def register(self, name: str, module: str) -> bool:
        """Register a type name for a module.

        Returns:
            True if the module owns the name after the call, False if
            another module registered it first.
        """
        owner = self._owners.setdefault(name, module)
        return owner == module

    def owner(self, name: str) -> str | None:
        """Get the module that declares a type, or None if unknown."""
        return self._owners.get(name)

    def items(self) -> Iterator[tuple[str, str]]:
        return iter(self._owners.items())

    def __contains__(self, name: object) -> bool:
        return name in self._owners

    def __len__(self) -> int:
        return len(self._owners)


@dataclass
class ImportPlan:
    """Imports needed by a module and the names that could not be resolved."""

    imports: list[ImportDeclaration] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)

    @property
    def imported_names(self) -> set[str]:
        return {name for imp in self.imports for name in imp.names}


def plan_imports(
    used_types: Iterable[str],
    declared_types: Container[str],
    registry: TypeRegistry,
) -> ImportPlan:
    """Group used-but-not-declared types by the module that owns them.

    Import clauses follow the order in which their modules are first
    discovered while walking ``used_types``.
    """
    plan = ImportPlan()
    grouped: dict[str, list[str]] = {}
    for name in used_types:
        if name in declared_types:
            continue
        owner = registry.owner(name)
        if owner is None:
            plan.unresolved.append(name)
            continue
        grouped.setdefault(owner, []).append(name)

    plan.imports = [
        ImportDeclaration(module=module, names=names) for module, names in grouped.items()
    ]
    return plan
