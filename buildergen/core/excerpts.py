"""Reusable excerpts and the per-run registry of class-level helpers."""

from __future__ import annotations

import logging
from abc import abstractmethod
from enum import Enum
from typing import Dict, Iterable, List, Tuple

from buildergen.core import java
from buildergen.core.errors import ExcerptConflictError
from buildergen.core.features import FeatureModel
from buildergen.core.source import Excerpt, ImportManager, SourceBuilder
from buildergen.core.types import QualifiedName, TypeRef

log = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Inline excerpts
# ------------------------------------------------------------------
class _CheckNotNullPreamble(Excerpt):
    def __init__(self, variable: str):
        self.variable = variable

    def add_to(self, code: SourceBuilder) -> None:
        if code.features.guava or code.features.has_objects_class:
            return
        code.add_line("  if (%s == null) {", self.variable)
        code.add_line("    throw new %s();", java.NULL_POINTER_EXCEPTION)
        code.add_line("  }")


class _CheckNotNullInline(Excerpt):
    def __init__(self, variable: str):
        self.variable = variable

    def add_to(self, code: SourceBuilder) -> None:
        if code.features.guava:
            code.add("%s.checkNotNull(%s)", java.PRECONDITIONS, self.variable)
        elif code.features.has_objects_class:
            code.add("%s.requireNonNull(%s)", java.OBJECTS, self.variable)
        else:
            code.add(self.variable)


def check_not_null_preamble(variable: str) -> Excerpt:
    """Statement-level null check, emitted only when no inline form exists."""
    return _CheckNotNullPreamble(variable)


def check_not_null_inline(variable: str) -> Excerpt:
    return _CheckNotNullInline(variable)


class _ForEach(Excerpt):
    def __init__(self, element_type: TypeRef, iterable: str, method: str):
        self.element_type = element_type
        self.iterable = iterable
        self.method = method

    def add_to(self, code: SourceBuilder) -> None:
        code.add_line("  for (%s element : %s) {", self.element_type, self.iterable)
        code.add_line("    %s(element);", self.method)
        code.add_line("  }")


def for_each(element_type: TypeRef, iterable: str, method: str) -> Excerpt:
    return _ForEach(element_type, iterable, method)


class _JavadocLink(Excerpt):
    def __init__(self, type_name: QualifiedName, method: str):
        self.type_name = type_name
        self.method = method

    def add_to(self, code: SourceBuilder) -> None:
        code.add("{@link %s#%s()}", self.type_name, self.method)


def javadoc_no_arg_method_link(type_name: QualifiedName, method: str) -> Excerpt:
    return _JavadocLink(type_name, method)


# ------------------------------------------------------------------
# Static excerpts
# ------------------------------------------------------------------
class ExcerptKind(str, Enum):
    METHOD = "method"
    TYPE = "type"


class StaticExcerpt(Excerpt):
    """Class-level helper emitted at most once per generated class."""

    def __init__(self, kind: ExcerptKind, name: str):
        self.kind = kind
        self.name = name

    @property
    def key(self) -> Tuple[str, str]:
        return (self.kind.value, self.name)

    @abstractmethod
    def add_to(self, code: SourceBuilder) -> None:
        ...

    def canonical_text(self, features: FeatureModel) -> str:
        # Fully-qualified so equal text means equal definitions
        code = SourceBuilder(features, ImportManager(shorten=False))
        self.add_to(code)
        return str(code)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.value}:{self.name})"


class StaticExcerptRegistry:
    """
    Run-scoped mapping from helper identity to helper definition.

    Registration is additive and order-independent. A key registered twice
    must carry the same definition both times.
    """

    def __init__(self, features: FeatureModel):
        self.features = features
        self._entries: Dict[Tuple[str, str], Tuple[StaticExcerpt, str]] = {}

    def register(self, excerpt: StaticExcerpt, *, source: str | None = None) -> bool:
        text = excerpt.canonical_text(self.features)
        existing = self._entries.get(excerpt.key)
        if existing is not None:
            if existing[1] != text:
                log.warning("static excerpt conflict key=%s:%s source=%s", excerpt.key[0], excerpt.key[1], source)
                raise ExcerptConflictError(key=excerpt.key, existing=existing[1], incoming=text, source=source)
            return False
        self._entries[excerpt.key] = (excerpt, text)
        log.debug("static excerpt registered key=%s:%s source=%s", excerpt.key[0], excerpt.key[1], source)
        return True

    def register_all(self, excerpts: Iterable[StaticExcerpt], *, source: str | None = None) -> int:
        return sum(1 for e in excerpts if self.register(e, source=source))

    def keys(self) -> List[Tuple[str, str]]:
        return sorted(self._entries.keys())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def add_to(self, code: SourceBuilder) -> None:
        for key in self.keys():
            self._entries[key][0].add_to(code)

    def render_each(self, imports: ImportManager) -> Dict[str, str]:
        out: Dict[str, str] = {}
        for key in self.keys():
            code = SourceBuilder(self.features, imports)
            self._entries[key][0].add_to(code)
            out[f"{key[0]}:{key[1]}"] = str(code)
        return out
