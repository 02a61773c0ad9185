from __future__ import annotations

from buildergen.core.excerpts import StaticExcerptRegistry
from buildergen.core.features import FeatureModel
from buildergen.core.generators.render import generate_list_property
from buildergen.core.metadata import BuilderDeclaration, Metadata, MethodSignature, Property
from buildergen.core.types import TypeRef

METADATA = Metadata.for_type("com.example.Person")


def _names() -> Property:
    return Property("names", TypeRef.declared("java.util.List", TypeRef.declared("java.lang.String")), "getNames")


def _scores() -> Property:
    return Property("scores", TypeRef.declared("java.util.List", TypeRef.declared("java.lang.Integer")), "getScores")


def _tags() -> Property:
    return Property("tags", TypeRef.declared("java.util.List", TypeRef.declared("java.lang.String")), "getTags")


# ------------------------------------------------------------------
# Value construction
# ------------------------------------------------------------------
def test_value_field_keeps_declared_type():
    frags = generate_list_property(METADATA, _names(), FeatureModel())
    assert frags.value_field_declaration == "private final List<String> names;\n"


def test_partial_assignment_matches_final_assignment():
    for features in (FeatureModel(), FeatureModel(guava=False)):
        frags = generate_list_property(METADATA, _names(), features)
        assert frags.partial_field_assignment == frags.final_field_assignment


def test_build_without_guava_goes_through_helper():
    frags = generate_list_property(METADATA, _scores(), FeatureModel(guava=False))
    assert frags.final_field_assignment == "this.scores = immutableList(builder.scores);\n"
    assert list(frags.static_excerpts) == ["method:immutableList"]
    helper = frags.static_excerpts["method:immutableList"]
    assert "private static <E> List<E> immutableList(List<E> elements) {" in helper
    assert "Collections.emptyList()" in helper


# ------------------------------------------------------------------
# mergeFrom
# ------------------------------------------------------------------
def test_merge_from_value_shares_immutable_list_when_untouched():
    frags = generate_list_property(METADATA, _names(), FeatureModel())
    assert frags.merge_from_value == (
        "if (value instanceof Person_Builder.Value && names == ImmutableList.<String>of()) {\n"
        "  names = ImmutableList.copyOf(value.getNames());\n"
        "} else {\n"
        "  addAllNames(value.getNames());\n"
        "}\n"
    )


def test_merge_from_value_without_guava_appends():
    frags = generate_list_property(METADATA, _scores(), FeatureModel(guava=False))
    assert frags.merge_from_value == "addAllScores(value.getScores());\n"


def test_merge_from_builder_reads_field_through_generated_superclass():
    frags = generate_list_property(METADATA, _names(), FeatureModel())
    assert frags.merge_from_builder == (
        "Person_Builder base = (Person_Builder) template;\n"
        "addAllNames(base.names);\n"
    )


def test_set_from_result_and_clear_field():
    frags = generate_list_property(METADATA, _names(), FeatureModel())
    assert frags.set_from_result == "builder.addAllNames(names);\n"
    assert frags.clear_field == "clearNames();\n"


# ------------------------------------------------------------------
# Helpers shared across properties
# ------------------------------------------------------------------
def test_shared_registry_emits_helper_once():
    features = FeatureModel(guava=False)
    registry = StaticExcerptRegistry(features)
    first = generate_list_property(METADATA, _names(), features, registry=registry)
    second = generate_list_property(METADATA, _tags(), features, registry=registry)

    assert len(registry) == 1
    assert list(first.static_excerpts) == ["method:immutableList"]
    assert list(second.static_excerpts) == ["method:immutableList"]


def test_declined_property_returns_none():
    prop = Property("ids", TypeRef.declared("java.util.Set", TypeRef.declared("java.lang.Long")), "getIds")
    assert generate_list_property(METADATA, prop, FeatureModel()) is None


# ------------------------------------------------------------------
# Imports and assembly
# ------------------------------------------------------------------
def test_imports_collect_referenced_types():
    frags = generate_list_property(METADATA, _names(), FeatureModel())
    assert "com.google.common.collect.ImmutableList" in frags.imports
    assert "com.google.common.base.Preconditions" in frags.imports
    assert "java.util.ArrayList" in frags.imports
    assert "java.util.function.Consumer" in frags.imports
    assert "java.lang.String" not in frags.imports
    assert not any(i.startswith("com.example.") for i in frags.imports)


def test_imports_without_guava_skip_guava_types():
    frags = generate_list_property(METADATA, _scores(), FeatureModel(guava=False))
    assert not any(i.startswith("com.google.") for i in frags.imports)
    assert "java.util.Collections" in frags.imports


def test_unshortened_output_is_fully_qualified():
    frags = generate_list_property(METADATA, _names(), FeatureModel(), shorten_imports=False)
    assert frags.field_declaration == (
        "private java.util.List<java.lang.String> names = com.google.common.collect.ImmutableList.of();\n"
    )
    assert frags.imports == []


def test_builder_members_start_with_field_and_end_with_helpers():
    frags = generate_list_property(METADATA, _scores(), FeatureModel(guava=False))
    members = frags.builder_members()
    assert members.startswith(frags.field_declaration)
    assert members.index("clearScores()") < members.index("immutableList(List<E> elements)")


def test_to_dict_is_json_friendly():
    data = generate_list_property(METADATA, _names(), FeatureModel()).to_dict()
    assert data["property"] == "names"
    assert data["field_kind"] == "immutable_default"
    assert isinstance(data["accessors"], dict)
    assert isinstance(data["imports"], list)


# ------------------------------------------------------------------
# Names hidden by the builder's nested types
# ------------------------------------------------------------------
def test_element_named_like_value_class_is_qualified():
    other_value = TypeRef.declared("com.other.Value")
    prop = Property("items", TypeRef.declared("java.util.List", other_value), "getItems")
    frags = generate_list_property(METADATA, prop, FeatureModel())

    assert frags.field_declaration == "private List<com.other.Value> items = ImmutableList.of();\n"
    assert "public Person.Builder addItems(com.other.Value element) {" in frags.accessors["add"]
    assert "value instanceof Person_Builder.Value && items == ImmutableList.<com.other.Value>of()" in frags.merge_from_value
    assert "com.other.Value" not in frags.imports


def test_element_named_like_checked_list_is_qualified_when_helper_is_used():
    other = TypeRef.declared("com.other.CheckedList")
    prop = Property("items", TypeRef.declared("java.util.List", other), "getItems")
    frags = generate_list_property(
        METADATA,
        prop,
        FeatureModel(),
        builder=BuilderDeclaration(methods=(MethodSignature("addItems", (other,)),)),
    )
    assert "Consumer<? super List<com.other.CheckedList>> mutator" in frags.accessors["mutate"]
    assert "new CheckedList<>(items, this::addItems)" in frags.accessors["mutate"]
    assert "com.other.CheckedList" not in frags.imports


def test_element_named_like_checked_list_is_imported_without_helper():
    prop = Property("items", TypeRef.declared("java.util.List", TypeRef.declared("com.other.CheckedList")), "getItems")
    frags = generate_list_property(METADATA, prop, FeatureModel())
    assert frags.field_declaration == "private List<CheckedList> items = ImmutableList.of();\n"
    assert "com.other.CheckedList" in frags.imports
