from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from buildergen.core.types import QualifiedName, TypeRef


@dataclass(frozen=True)
class MethodSignature:
    name: str
    parameter_types: Tuple[TypeRef, ...] = ()
    abstract: bool = False


@dataclass(frozen=True)
class BuilderDeclaration:
    """Methods visible on the user-written builder, inherited ones included."""

    methods: Tuple[MethodSignature, ...] = ()

    def overrides(self, name: str, *parameter_types: TypeRef) -> bool:
        wanted = tuple(t.erasure() for t in parameter_types)
        for m in self.methods:
            if m.abstract or m.name != name:
                continue
            if tuple(t.erasure() for t in m.parameter_types) == wanted:
                return True
        return False


@dataclass(frozen=True)
class Property:
    name: str
    type: TypeRef
    getter_name: str
    capitalized_name: str = ""
    accessor_annotations: Tuple[QualifiedName, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Property name must not be empty")
        if not self.capitalized_name:
            object.__setattr__(self, "capitalized_name", self.name[:1].upper() + self.name[1:])


@dataclass(frozen=True)
class Metadata:
    type: QualifiedName
    builder: TypeRef
    generated_builder: TypeRef
    value_type: QualifiedName
    properties: Tuple[Property, ...] = field(default_factory=tuple)

    @classmethod
    def for_type(cls, type_name: QualifiedName | str, *, properties: Tuple[Property, ...] = ()) -> "Metadata":
        """Conventional layout: ``Person.Builder`` extends ``Person_Builder``."""
        if isinstance(type_name, str):
            type_name = QualifiedName.parse(type_name)
        generated = QualifiedName(type_name.package, ("_".join(type_name.simple_names) + "_Builder",))
        return cls(
            type=type_name,
            builder=TypeRef.declared(type_name.nested("Builder")),
            generated_builder=TypeRef.declared(generated),
            value_type=generated.nested("Value"),
            properties=tuple(properties),
        )

    def property_named(self, name: str) -> Optional[Property]:
        for p in self.properties:
            if p.name == name:
                return p
        return None


# ------------------------------------------------------------------
# Builder method names
# ------------------------------------------------------------------
def add_method(p: Property) -> str:
    return "add" + p.capitalized_name


def add_all_method(p: Property) -> str:
    return "addAll" + p.capitalized_name


def clear_method(p: Property) -> str:
    return "clear" + p.capitalized_name


def mutator(p: Property) -> str:
    return "mutate" + p.capitalized_name


def getter(p: Property) -> str:
    return p.getter_name
