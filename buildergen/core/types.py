"""Minimal Java type model used by the property generators.

Types arrive already resolved by the caller; nothing here parses Java source.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple, Union


@dataclass(frozen=True)
class QualifiedName:
    package: str
    simple_names: Tuple[str, ...]

    @classmethod
    def of(cls, package: str, first: str, *rest: str) -> "QualifiedName":
        return cls(package=package, simple_names=(first, *rest))

    @classmethod
    def parse(cls, dotted: str) -> "QualifiedName":
        """Split ``java.util.Map.Entry`` at the first capitalized segment."""
        parts = [p for p in (dotted or "").strip().split(".") if p]
        for i, part in enumerate(parts):
            if part[:1].isupper():
                return cls(package=".".join(parts[:i]), simple_names=tuple(parts[i:]))
        raise ValueError(f"Cannot find a class name in {dotted!r}")

    @property
    def simple_name(self) -> str:
        return self.simple_names[-1]

    @property
    def top_level(self) -> "QualifiedName":
        return QualifiedName(self.package, self.simple_names[:1])

    def nested(self, name: str) -> "QualifiedName":
        return QualifiedName(self.package, self.simple_names + (name,))

    def __str__(self) -> str:
        local = ".".join(self.simple_names)
        return f"{self.package}.{local}" if self.package else local


class TypeKind(str, Enum):
    DECLARED = "declared"
    PRIMITIVE = "primitive"
    WILDCARD = "wildcard"
    TYPEVAR = "typevar"
    ARRAY = "array"


PRIMITIVES = ("boolean", "byte", "short", "int", "long", "char", "float", "double")

Namer = Callable[[QualifiedName], str]


@dataclass(frozen=True)
class TypeRef:
    kind: TypeKind
    name: Optional[QualifiedName] = None
    keyword: Optional[str] = None
    args: Tuple["TypeRef", ...] = ()
    extends_bound: Optional["TypeRef"] = None
    super_bound: Optional["TypeRef"] = None
    component: Optional["TypeRef"] = None

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def declared(cls, name: Union[QualifiedName, str], *args: "TypeRef") -> "TypeRef":
        if isinstance(name, str):
            name = QualifiedName.parse(name)
        return cls(kind=TypeKind.DECLARED, name=name, args=tuple(args))

    @classmethod
    def primitive(cls, keyword: str) -> "TypeRef":
        if keyword not in PRIMITIVES:
            raise ValueError(f"Not a primitive type: {keyword!r}")
        return cls(kind=TypeKind.PRIMITIVE, keyword=keyword)

    @classmethod
    def wildcard(cls, *, extends: Optional["TypeRef"] = None, super_: Optional["TypeRef"] = None) -> "TypeRef":
        if extends is not None and super_ is not None:
            raise ValueError("A wildcard cannot have both bounds")
        return cls(kind=TypeKind.WILDCARD, extends_bound=extends, super_bound=super_)

    @classmethod
    def type_variable(cls, name: str, bound: Optional["TypeRef"] = None) -> "TypeRef":
        return cls(kind=TypeKind.TYPEVAR, keyword=name, extends_bound=bound)

    @classmethod
    def array_of(cls, component: "TypeRef") -> "TypeRef":
        return cls(kind=TypeKind.ARRAY, component=component)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def is_primitive(self) -> bool:
        return self.kind is TypeKind.PRIMITIVE

    @property
    def is_declared(self) -> bool:
        return self.kind is TypeKind.DECLARED

    def erasure(self) -> str:
        if self.kind is TypeKind.DECLARED:
            return str(self.name)
        if self.kind is TypeKind.PRIMITIVE:
            return self.keyword or ""
        if self.kind is TypeKind.ARRAY:
            return self.component.erasure() + "[]"
        if self.extends_bound is not None:
            return self.extends_bound.erasure()
        return str(OBJECT)

    def render(self, namer: Namer = str) -> str:
        if self.kind is TypeKind.DECLARED:
            text = namer(self.name)
            if self.args:
                text += "<" + ", ".join(a.render(namer) for a in self.args) + ">"
            return text
        if self.kind in (TypeKind.PRIMITIVE, TypeKind.TYPEVAR):
            return self.keyword or ""
        if self.kind is TypeKind.ARRAY:
            return self.component.render(namer) + "[]"
        if self.extends_bound is not None:
            return "? extends " + self.extends_bound.render(namer)
        if self.super_bound is not None:
            return "? super " + self.super_bound.render(namer)
        return "?"

    def __str__(self) -> str:
        return self.render()


OBJECT = QualifiedName.of("java.lang", "Object")
OBJECT_TYPE = TypeRef.declared(OBJECT)

BOXED: Dict[str, QualifiedName] = {
    "boolean": QualifiedName.of("java.lang", "Boolean"),
    "byte": QualifiedName.of("java.lang", "Byte"),
    "short": QualifiedName.of("java.lang", "Short"),
    "int": QualifiedName.of("java.lang", "Integer"),
    "long": QualifiedName.of("java.lang", "Long"),
    "char": QualifiedName.of("java.lang", "Character"),
    "float": QualifiedName.of("java.lang", "Float"),
    "double": QualifiedName.of("java.lang", "Double"),
}
_UNBOXED: Dict[QualifiedName, str] = {v: k for k, v in BOXED.items()}


def erases_to_any_of(t: Optional[TypeRef], *names: QualifiedName) -> bool:
    return t is not None and t.is_declared and t.name in names


def upper_bound(t: TypeRef) -> TypeRef:
    if t.kind is TypeKind.WILDCARD:
        return t.extends_bound if t.extends_bound is not None else OBJECT_TYPE
    return t


def maybe_unbox(t: TypeRef) -> Optional[TypeRef]:
    if t.is_declared and not t.args and t.name in _UNBOXED:
        return TypeRef.primitive(_UNBOXED[t.name])
    return None


def box(t: TypeRef) -> TypeRef:
    if t.is_primitive:
        return TypeRef.declared(BOXED[t.keyword])
    return t
