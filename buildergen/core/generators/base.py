from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Protocol, Tuple

from buildergen.core.errors import FeatureMismatchError
from buildergen.core.excerpts import StaticExcerpt
from buildergen.core.features import FeatureModel
from buildergen.core.metadata import BuilderDeclaration, Metadata, Property
from buildergen.core.source import Block, SourceBuilder


@dataclass(frozen=True)
class Config:
    metadata: Metadata
    property: Property
    features: FeatureModel
    builder: BuilderDeclaration = field(default_factory=BuilderDeclaration)


class PropertyCodeGenerator(ABC):
    """Emits everything one property contributes to the generated builder and value."""

    def __init__(self, metadata: Metadata, prop: Property, features: FeatureModel):
        self.metadata = metadata
        self.property = prop
        self.features = features

    def check_features(self, code: SourceBuilder) -> None:
        if code.features.describe() != self.features.describe():
            raise FeatureMismatchError(expected=self.features, actual=code.features)

    def add_value_field_declaration(self, code: SourceBuilder, final_field: str) -> None:
        self.check_features(code)
        code.add_line("private final %s %s;", self.property.type, final_field)

    @abstractmethod
    def add_builder_field_declaration(self, code: SourceBuilder) -> None:
        ...

    @abstractmethod
    def add_builder_field_accessors(self, code: SourceBuilder) -> None:
        ...

    @abstractmethod
    def add_final_field_assignment(self, code: SourceBuilder, final_field: str, builder: str) -> None:
        ...

    def add_partial_field_assignment(self, code: SourceBuilder, final_field: str, builder: str) -> None:
        self.add_final_field_assignment(code, final_field, builder)

    @abstractmethod
    def add_merge_from_value(self, code: Block, value: str) -> None:
        ...

    @abstractmethod
    def add_merge_from_builder(self, code: Block, builder: str) -> None:
        ...

    @abstractmethod
    def add_set_from_result(self, code: SourceBuilder, builder: str, variable: str) -> None:
        ...

    @abstractmethod
    def add_clear_field(self, code: Block) -> None:
        ...

    def get_static_excerpts(self) -> Tuple[StaticExcerpt, ...]:
        return ()

    def add_accessor_annotations(self, code: SourceBuilder) -> None:
        for annotation in self.property.accessor_annotations:
            code.add_line("@%s", annotation)


class PropertyCodeGeneratorFactory(Protocol):
    def create(self, config: Config) -> Optional[PropertyCodeGenerator]:
        ...


def upcast_to_generated_builder(code: Block, metadata: Metadata, builder: str) -> str:
    """Declare ``base``, the other builder viewed as the generated superclass."""
    return code.declare(
        "upcast:" + builder,
        metadata.generated_builder,
        "base",
        "(%s) %s",
        metadata.generated_builder,
        builder,
    )
