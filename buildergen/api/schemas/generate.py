from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from buildergen.core.features import FeatureModel
from buildergen.core.metadata import BuilderDeclaration, Metadata, MethodSignature, Property
from buildergen.core.types import QualifiedName, TypeKind, TypeRef


class TypeRefModel(BaseModel):
    kind: TypeKind = TypeKind.DECLARED
    name: Optional[str] = Field(default=None, description="Qualified class name for declared types.")
    keyword: Optional[str] = Field(default=None, description="Primitive keyword or type variable name.")
    args: List["TypeRefModel"] = Field(default_factory=list)
    extends_bound: Optional["TypeRefModel"] = None
    super_bound: Optional["TypeRefModel"] = None
    component: Optional["TypeRefModel"] = None

    def to_type(self) -> TypeRef:
        if self.kind is TypeKind.DECLARED:
            if not self.name:
                raise ValueError("declared type requires 'name'")
            return TypeRef.declared(self.name, *(a.to_type() for a in self.args))
        if self.kind is TypeKind.PRIMITIVE:
            return TypeRef.primitive(self.keyword or "")
        if self.kind is TypeKind.WILDCARD:
            return TypeRef.wildcard(
                extends=self.extends_bound.to_type() if self.extends_bound else None,
                super_=self.super_bound.to_type() if self.super_bound else None,
            )
        if self.kind is TypeKind.TYPEVAR:
            if not self.keyword:
                raise ValueError("type variable requires 'keyword'")
            return TypeRef.type_variable(
                self.keyword,
                self.extends_bound.to_type() if self.extends_bound else None,
            )
        if self.component is None:
            raise ValueError("array type requires 'component'")
        return TypeRef.array_of(self.component.to_type())


TypeRefModel.model_rebuild()


class MethodModel(BaseModel):
    name: str
    parameter_types: List[TypeRefModel] = Field(default_factory=list)
    abstract: bool = False

    def to_signature(self) -> MethodSignature:
        return MethodSignature(
            name=self.name,
            parameter_types=tuple(t.to_type() for t in self.parameter_types),
            abstract=self.abstract,
        )


class PropertyModel(BaseModel):
    name: str
    type: TypeRefModel
    getter_name: Optional[str] = None
    capitalized_name: Optional[str] = None
    accessor_annotations: List[str] = Field(default_factory=list)

    def to_property(self) -> Property:
        cap = self.capitalized_name or (self.name[:1].upper() + self.name[1:])
        return Property(
            name=self.name,
            type=self.type.to_type(),
            getter_name=self.getter_name or f"get{cap}",
            capitalized_name=cap,
            accessor_annotations=tuple(QualifiedName.parse(a) for a in self.accessor_annotations),
        )


class MetadataModel(BaseModel):
    type: str = Field(description="Qualified name of the value type, e.g. com.example.Person")
    builder: Optional[str] = None
    generated_builder: Optional[str] = None
    value_type: Optional[str] = None

    def to_metadata(self) -> Metadata:
        md = Metadata.for_type(self.type)
        return Metadata(
            type=md.type,
            builder=TypeRef.declared(self.builder) if self.builder else md.builder,
            generated_builder=TypeRef.declared(self.generated_builder) if self.generated_builder else md.generated_builder,
            value_type=QualifiedName.parse(self.value_type) if self.value_type else md.value_type,
        )


class FeaturesModel(BaseModel):
    guava: bool = True
    source_level: int = 8
    function_package: Optional[bool] = None

    def to_features(self) -> FeatureModel:
        return FeatureModel(
            guava=self.guava,
            source_level=self.source_level,
            function_package=self.function_package,
        )


class GenerateListPropertyRequest(BaseModel):
    metadata: MetadataModel
    property: PropertyModel
    builder_methods: List[MethodModel] = Field(default_factory=list)
    features: Optional[FeaturesModel] = None

    def to_builder(self) -> BuilderDeclaration:
        return BuilderDeclaration(methods=tuple(m.to_signature() for m in self.builder_methods))


class GeneratedFragmentsModel(BaseModel):
    property: str
    field_kind: str
    field_declaration: str
    value_field_declaration: str
    accessors: Dict[str, str]
    final_field_assignment: str
    partial_field_assignment: str
    merge_from_value: str
    merge_from_builder: str
    set_from_result: str
    clear_field: str
    static_excerpts: Dict[str, str]
    imports: List[str]


class GenerateListPropertyResponse(BaseModel):
    applicable: bool
    features: Dict[str, Any] = Field(default_factory=dict)
    fragments: Optional[GeneratedFragmentsModel] = None
