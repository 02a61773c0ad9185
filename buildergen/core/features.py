"""Capabilities of the environment the generated source will compile in.

The caller decides what is available; this module only answers questions
about it. A ``FeatureModel`` is fixed for a whole generation run.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from buildergen.core import java
from buildergen.core.errors import InvalidFeatureModelError
from buildergen.core.source import Excerpt, SourceBuilder
from buildergen.core.types import TypeKind, TypeRef


class SourceLevel(IntEnum):
    JAVA_6 = 6
    JAVA_7 = 7
    JAVA_8 = 8


@dataclass(frozen=True)
class FeatureModel:
    guava: bool = True
    source_level: SourceLevel = SourceLevel.JAVA_8
    function_package: Optional[bool] = None

    def __post_init__(self) -> None:
        try:
            level = SourceLevel(int(self.source_level))
        except (TypeError, ValueError):
            raise InvalidFeatureModelError(f"unsupported source level {self.source_level!r}") from None
        object.__setattr__(self, "source_level", level)

        if self.function_package and level < SourceLevel.JAVA_8:
            raise InvalidFeatureModelError(
                f"java.util.function requires Java 8 (source level is {int(level)})"
            )

    # ------------------------------------------------------------------
    # Language level
    # ------------------------------------------------------------------
    @property
    def lambdas(self) -> bool:
        return self.source_level >= SourceLevel.JAVA_8

    @property
    def has_objects_class(self) -> bool:
        return self.source_level >= SourceLevel.JAVA_7

    def stream(self):
        return java.STREAM if self.lambdas else None

    def spliterator(self):
        return java.SPLITERATOR if self.lambdas else None

    def base_stream(self):
        return java.BASE_STREAM if self.lambdas else None

    @property
    def lazy_iteration(self) -> bool:
        return self.stream() is not None

    # ------------------------------------------------------------------
    # Function package
    # ------------------------------------------------------------------
    @property
    def has_function_package(self) -> bool:
        if self.function_package is None:
            return self.lambdas
        return bool(self.function_package)

    def consumer(self):
        return java.CONSUMER if self.has_function_package else None

    # ------------------------------------------------------------------
    # Libraries
    # ------------------------------------------------------------------
    def array_utils(self, element_type: TypeRef):
        """Class with a zero-copy ``asList`` for arrays of ``element_type``, if any."""
        if element_type.kind is not TypeKind.PRIMITIVE:
            return java.ARRAYS
        if not self.guava:
            return None
        return java.GUAVA_PRIMITIVE_UTILS[element_type.keyword]

    def diamond_operator(self, element_type: TypeRef) -> "DiamondOperator":
        return DiamondOperator(element_type)

    def describe(self) -> dict:
        return {
            "guava": self.guava,
            "source_level": int(self.source_level),
            "function_package": self.has_function_package,
            "lazy_iteration": self.lazy_iteration,
        }


class DiamondOperator(Excerpt):
    def __init__(self, element_type: TypeRef):
        self.element_type = element_type

    def add_to(self, code: SourceBuilder) -> None:
        if code.features.source_level >= SourceLevel.JAVA_7:
            code.add("<>")
        else:
            code.add("<%s>", self.element_type)
