"""Accreting source buffers.

``SourceBuilder`` collects raw Java text. Format strings use ``%s``
placeholders; arguments are rendered before interpolation so that qualified
names are shortened through the shared ``ImportManager`` and excerpts are
expanded in place.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Set, Union

from buildergen.core.types import QualifiedName, TypeRef

if TYPE_CHECKING:
    from buildergen.core.features import FeatureModel


class Excerpt(ABC):
    """A fragment of source that writes itself into a ``SourceBuilder``."""

    @abstractmethod
    def add_to(self, code: "SourceBuilder") -> None:
        ...


class ImportManager:
    """
    Shortens qualified names and tracks the imports they need.

    ``reserved`` holds simple names already bound inside the generated class
    (its nested types). A class whose simple name is reserved would be hidden
    by the nested type, so it is always written fully qualified.
    """

    def __init__(self, *, shorten: bool = True, local_package: str = "", reserved: Iterable[str] = ()):
        self._shorten = shorten
        self.local_package = local_package
        self._reserved: Set[str] = set(reserved)
        self._by_simple_name: Dict[str, QualifiedName] = {}

    def reserve(self, *simple_names: str) -> None:
        self._reserved.update(simple_names)

    def shorten(self, name: QualifiedName) -> str:
        if not self._shorten:
            return str(name)

        top = name.top_level
        if top.simple_name in self._reserved:
            return str(name)
        local = ".".join(name.simple_names)
        existing = self._by_simple_name.get(top.simple_name)
        if existing is None:
            self._by_simple_name[top.simple_name] = top
            return local
        if existing == top:
            return local
        # Simple name already taken by another class
        return str(name)

    def imports(self) -> List[str]:
        skip = {"java.lang", self.local_package, ""}
        return sorted(str(q) for q in self._by_simple_name.values() if q.package not in skip)


class SourceBuilder:
    def __init__(self, features: "FeatureModel", imports: Optional[ImportManager] = None):
        self.features = features
        self.imports = imports if imports is not None else ImportManager()
        self._parts: List[str] = []

    def add(self, fmt: Union[str, Excerpt], *args: Any) -> "SourceBuilder":
        if isinstance(fmt, Excerpt):
            fmt.add_to(self)
            return self
        if args:
            fmt = fmt % tuple(self.render(a) for a in args)
        self._parts.append(fmt)
        return self

    def add_line(self, fmt: Union[str, Excerpt] = "", *args: Any) -> "SourceBuilder":
        self.add(fmt, *args)
        self._parts.append("\n")
        return self

    def render(self, arg: Any) -> str:
        if isinstance(arg, QualifiedName):
            return self.imports.shorten(arg)
        if isinstance(arg, TypeRef):
            return arg.render(self.imports.shorten)
        if isinstance(arg, Excerpt):
            sub = self.subbuilder()
            arg.add_to(sub)
            return str(sub)
        return str(arg)

    def subbuilder(self) -> "SourceBuilder":
        return SourceBuilder(self.features, self.imports)

    def is_empty(self) -> bool:
        return not any(self._parts)

    def __str__(self) -> str:
        return "".join(self._parts)


class Block(SourceBuilder):
    """Method body buffer whose local declarations are emitted once, up front."""

    def __init__(self, features: "FeatureModel", imports: Optional[ImportManager] = None):
        super().__init__(features, imports)
        self._declarations: Dict[str, str] = {}

    def declare(self, key: str, type_: Any, name: str, value_fmt: str, *args: Any) -> str:
        if key not in self._declarations:
            value = value_fmt % tuple(self.render(a) for a in args) if args else value_fmt
            self._declarations[key] = f"{self.render(type_)} {name} = {value};\n"
        return name

    def __str__(self) -> str:
        return "".join(self._declarations.values()) + super().__str__()
