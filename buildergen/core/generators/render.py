from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Set

from buildergen.core.excerpts import ExcerptKind, StaticExcerptRegistry
from buildergen.core.features import FeatureModel
from buildergen.core.generators.base import Config
from buildergen.core.generators.list_property import ListPropertyCodeGenerator, ListPropertyFactory
from buildergen.core.metadata import BuilderDeclaration, Metadata, Property
from buildergen.core.source import Block, ImportManager, SourceBuilder

log = logging.getLogger(__name__)


@dataclass
class GeneratedFragments:
    property: str
    field_kind: str
    field_declaration: str
    value_field_declaration: str
    accessors: Dict[str, str] = field(default_factory=dict)
    final_field_assignment: str = ""
    partial_field_assignment: str = ""
    merge_from_value: str = ""
    merge_from_builder: str = ""
    set_from_result: str = ""
    clear_field: str = ""
    static_excerpts: Dict[str, str] = field(default_factory=dict)
    imports: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def builder_members(self) -> str:
        """Field, accessors and helpers in the order they sit in the builder class."""
        parts = [self.field_declaration]
        parts.extend(self.accessors.values())
        parts.extend(self.static_excerpts.values())
        return "".join(parts)


def _nested_type_names(
    metadata: Metadata,
    generator: ListPropertyCodeGenerator,
    registry: StaticExcerptRegistry,
) -> Set[str]:
    """Simple names declared inside the generated builder, which shadow imports."""
    names = {metadata.value_type.simple_name}
    names.update(e.name for e in generator.get_static_excerpts() if e.kind is ExcerptKind.TYPE)
    names.update(name for kind, name in registry.keys() if kind == ExcerptKind.TYPE.value)
    return names


def generate_list_property(
    metadata: Metadata,
    prop: Property,
    features: FeatureModel,
    *,
    builder: Optional[BuilderDeclaration] = None,
    registry: Optional[StaticExcerptRegistry] = None,
    shorten_imports: bool = True,
) -> Optional[GeneratedFragments]:
    """
    Run the list property strategy for one property.

    Returns None when the property is not list-typed. Pass a shared
    ``registry`` to collect helpers across several properties of one class.
    """
    config = Config(
        metadata=metadata,
        property=prop,
        features=features,
        builder=builder or BuilderDeclaration(),
    )
    generator = ListPropertyFactory().create(config)
    if generator is None:
        return None

    if registry is None:
        registry = StaticExcerptRegistry(features)
    imports = ImportManager(
        shorten=shorten_imports,
        local_package=metadata.type.package,
        reserved=_nested_type_names(metadata, generator, registry),
    )

    def fresh() -> SourceBuilder:
        return SourceBuilder(features, imports)

    def fresh_block() -> Block:
        return Block(features, imports)

    field_decl = fresh()
    generator.add_builder_field_declaration(field_decl)

    value_field = fresh()
    generator.add_value_field_declaration(value_field, prop.name)

    accessors: Dict[str, str] = {}
    for name, emit in generator.accessors():
        code = fresh()
        emit(code)
        accessors[name] = str(code)

    final_assignment = fresh()
    generator.add_final_field_assignment(final_assignment, f"this.{prop.name}", "builder")

    partial_assignment = fresh()
    generator.add_partial_field_assignment(partial_assignment, f"this.{prop.name}", "builder")

    merge_value = fresh_block()
    generator.add_merge_from_value(merge_value, "value")

    merge_builder = fresh_block()
    generator.add_merge_from_builder(merge_builder, "template")

    set_from_result = fresh()
    generator.add_set_from_result(set_from_result, "builder", prop.name)

    clear_field = fresh_block()
    generator.add_clear_field(clear_field)

    registry.register_all(generator.get_static_excerpts(), source=prop.name)

    fragments = GeneratedFragments(
        property=prop.name,
        field_kind=generator.field.kind,
        field_declaration=str(field_decl),
        value_field_declaration=str(value_field),
        accessors=accessors,
        final_field_assignment=str(final_assignment),
        partial_field_assignment=str(partial_assignment),
        merge_from_value=str(merge_value),
        merge_from_builder=str(merge_builder),
        set_from_result=str(set_from_result),
        clear_field=str(clear_field),
        static_excerpts=registry.render_each(imports),
        imports=[],
    )
    fragments.imports = imports.imports()
    log.debug(
        "generated list property=%s field=%s accessors=%s excerpts=%s",
        prop.name,
        fragments.field_kind,
        len(accessors),
        len(fragments.static_excerpts),
    )
    return fragments
