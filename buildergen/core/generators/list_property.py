"""Append-only semantics for ``List`` properties.

The builder field has one of two representations, picked once per generator
from the feature model:

* ``ImmutableDefaultField`` (Guava available): the field starts as the shared
  ``ImmutableList.of()`` and is swapped for an ``ArrayList`` copy on first
  mutation, so untouched builders never allocate.
* ``ArrayListField`` (no Guava): the field is always an owned ``ArrayList``.

Both honour the same accessor contract; only the emitted text differs.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from buildergen.core import java
from buildergen.core.errors import MissingFeatureError
from buildergen.core.excerpts import (
    ExcerptKind,
    StaticExcerpt,
    check_not_null_inline,
    check_not_null_preamble,
    for_each,
    javadoc_no_arg_method_link,
)
from buildergen.core.features import FeatureModel
from buildergen.core.generators import checked_list
from buildergen.core.generators.base import Config, PropertyCodeGenerator, upcast_to_generated_builder
from buildergen.core.generators.templates import render_template
from buildergen.core.metadata import (
    Metadata,
    Property,
    add_all_method,
    add_method,
    clear_method,
    getter,
    mutator,
)
from buildergen.core.observability.metrics import inc_named, record_list_property
from buildergen.core.source import Block, SourceBuilder
from buildergen.core.types import OBJECT_TYPE, TypeRef, erases_to_any_of, maybe_unbox, upper_bound

log = logging.getLogger(__name__)

LIST_TYPES = (java.COLLECTION, java.LIST, java.IMMUTABLE_LIST)


@dataclass(frozen=True)
class ListPropertyDescriptor:
    property: Property
    element_type: TypeRef
    unboxed_type: Optional[TypeRef]
    overrides_add_method: bool

    @property
    def parameter_type(self) -> TypeRef:
        return self.unboxed_type if self.unboxed_type is not None else self.element_type


class ListPropertyFactory:
    def create(self, config: Config) -> Optional["ListPropertyCodeGenerator"]:
        prop = config.property
        if not erases_to_any_of(prop.type, *LIST_TYPES):
            log.debug("list_property declined property=%s type=%s", prop.name, prop.type)
            inc_named("list_property.declined")
            record_list_property("declined", "none")
            return None

        element_type = upper_bound(prop.type.args[0]) if prop.type.args else OBJECT_TYPE
        unboxed_type = maybe_unbox(element_type)
        overrides = config.builder.overrides(
            add_method(prop),
            unboxed_type if unboxed_type is not None else element_type,
        )
        descriptor = ListPropertyDescriptor(
            property=prop,
            element_type=element_type,
            unboxed_type=unboxed_type,
            overrides_add_method=overrides,
        )
        generator = ListPropertyCodeGenerator(config.metadata, descriptor, config.features)

        log.debug(
            "list_property matched property=%s element=%s unboxed=%s overrides_add=%s field=%s",
            prop.name,
            element_type,
            unboxed_type,
            overrides,
            generator.field.kind,
        )
        inc_named("list_property.matched")
        record_list_property("matched", generator.field.kind)
        return generator


# ------------------------------------------------------------------
# Field representations
# ------------------------------------------------------------------
class ListField(ABC):
    kind: str = ""

    def __init__(self, generator: "ListPropertyCodeGenerator"):
        self.name = generator.property.name
        self.element_type = generator.element_type
        self.generator = generator

    @abstractmethod
    def add_declaration(self, code: SourceBuilder) -> None:
        ...

    def ensure_mutable(self, code: SourceBuilder, indent: str = "  ") -> None:
        pass

    @abstractmethod
    def reserve_capacity(
        self,
        code: SourceBuilder,
        indent: str,
        size: str,
        nonzero_guard: Optional[str] = None,
    ) -> None:
        ...

    @abstractmethod
    def add_clear(self, code: SourceBuilder) -> None:
        ...

    @abstractmethod
    def add_final_assignment(self, code: SourceBuilder, final_field: str, builder: str) -> None:
        ...

    @abstractmethod
    def add_merge_from_value(self, code: Block, value: str) -> None:
        ...

    def static_excerpts(self) -> Tuple[StaticExcerpt, ...]:
        return ()


class ImmutableDefaultField(ListField):
    kind = "immutable_default"

    def add_declaration(self, code: SourceBuilder) -> None:
        code.add_line(
            "private %s<%s> %s = %s.of();",
            java.LIST,
            self.element_type,
            self.name,
            java.IMMUTABLE_LIST,
        )

    def ensure_mutable(self, code: SourceBuilder, indent: str = "  ") -> None:
        code.add_line("%sif (this.%s instanceof %s) {", indent, self.name, java.IMMUTABLE_LIST)
        code.add_line(
            "%s  this.%s = new %s%s(this.%s);",
            indent,
            self.name,
            java.ARRAY_LIST,
            code.features.diamond_operator(self.element_type),
            self.name,
        )
        code.add_line("%s}", indent)

    def reserve_capacity(self, code, indent, size, nonzero_guard=None):
        inner = indent
        if nonzero_guard:
            code.add_line("%sif (%s) {", indent, nonzero_guard)
            inner = indent + "  "
        self.ensure_mutable(code, inner)
        code.add_line(
            "%s((%s<?>) %s).ensureCapacity(%s.size() + %s);",
            inner,
            java.ARRAY_LIST,
            self.name,
            self.name,
            size,
        )
        if nonzero_guard:
            code.add_line("%s}", indent)

    def add_clear(self, code: SourceBuilder) -> None:
        code.add_line("  if (%s instanceof %s) {", self.name, java.IMMUTABLE_LIST)
        code.add_line("    %s = %s.of();", self.name, java.IMMUTABLE_LIST)
        code.add_line("  } else {")
        code.add_line("    %s.clear();", self.name)
        code.add_line("  }")

    def add_final_assignment(self, code, final_field, builder):
        code.add_line("%s = %s.copyOf(%s.%s);", final_field, java.IMMUTABLE_LIST, builder, self.name)

    def add_merge_from_value(self, code: Block, value: str) -> None:
        prop = self.generator.property
        code.add_line(
            "if (%s instanceof %s && %s == %s.<%s>of()) {",
            value,
            self.generator.metadata.value_type,
            self.name,
            java.IMMUTABLE_LIST,
            self.element_type,
        )
        code.add_line("  %s = %s.copyOf(%s.%s());", self.name, java.IMMUTABLE_LIST, value, prop.getter_name)
        code.add_line("} else {")
        code.add_line("  %s(%s.%s());", add_all_method(prop), value, prop.getter_name)
        code.add_line("}")


class ArrayListField(ListField):
    kind = "array_list"

    def add_declaration(self, code: SourceBuilder) -> None:
        code.add_line(
            "private final %s<%s> %s = new %s%s();",
            java.ARRAY_LIST,
            self.element_type,
            self.name,
            java.ARRAY_LIST,
            code.features.diamond_operator(self.element_type),
        )

    def reserve_capacity(self, code, indent, size, nonzero_guard=None):
        code.add_line("%s%s.ensureCapacity(%s.size() + %s);", indent, self.name, self.name, size)

    def add_clear(self, code: SourceBuilder) -> None:
        code.add_line("  %s.clear();", self.name)

    def add_final_assignment(self, code, final_field, builder):
        code.add_line("%s = %s(%s.%s);", final_field, IMMUTABLE_LIST_METHOD.name, builder, self.name)

    def add_merge_from_value(self, code: Block, value: str) -> None:
        prop = self.generator.property
        code.add_line("%s(%s.%s());", add_all_method(prop), value, prop.getter_name)

    def static_excerpts(self) -> Tuple[StaticExcerpt, ...]:
        return (IMMUTABLE_LIST_METHOD,)


# ------------------------------------------------------------------
# Generator
# ------------------------------------------------------------------
class ListPropertyCodeGenerator(PropertyCodeGenerator):

    def __init__(self, metadata: Metadata, descriptor: ListPropertyDescriptor, features: FeatureModel):
        super().__init__(metadata, descriptor.property, features)
        self.descriptor = descriptor
        self.element_type = descriptor.element_type
        self.unboxed_type = descriptor.unboxed_type
        self.overrides_add_method = descriptor.overrides_add_method
        self.field: ListField = ImmutableDefaultField(self) if features.guava else ArrayListField(self)

    # ------------------------------------------------------------------
    # Builder field
    # ------------------------------------------------------------------
    def add_builder_field_declaration(self, code: SourceBuilder) -> None:
        self.check_features(code)
        self.field.add_declaration(code)

    def accessors(self) -> List[Tuple[str, Callable[[SourceBuilder], None]]]:
        """Accessor emitters in output order, keyed by a stable fragment name."""
        out: List[Tuple[str, Callable[[SourceBuilder], None]]] = [
            ("add", self.add_add),
            ("add_varargs", self.add_varargs_add),
        ]
        if self.features.lazy_iteration:
            out += [
                ("add_all_spliterator", self.add_spliterator_add_all),
                ("add_all_stream", self.add_stream_add_all),
                ("add_all_iterable", self.add_iterable_add_all),
            ]
        else:
            out.append(("add_all_iterable", self.add_pre_streams_add_all))
        if self.features.consumer() is not None:
            out.append(("mutate", self.add_mutate))
        out += [
            ("clear", self.add_clear),
            ("getter", self.add_getter),
        ]
        return out

    def add_builder_field_accessors(self, code: SourceBuilder) -> None:
        self.check_features(code)
        for _name, emit in self.accessors():
            emit(code)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def _getter_link(self):
        return javadoc_no_arg_method_link(self.metadata.type, getter(self.property))

    def _builder_simple_name(self) -> str:
        return self.metadata.builder.name.simple_name

    def add_add(self, code: SourceBuilder) -> None:
        self.check_features(code)
        code.add_line("")
        code.add_line("/**")
        code.add_line(" * Adds {@code element} to the list to be returned from %s.", self._getter_link())
        code.add_line(" *")
        code.add_line(" * @return this {@code %s} object", self._builder_simple_name())
        if self.unboxed_type is None:
            code.add_line(" * @throws NullPointerException if {@code element} is null")
        code.add_line(" */")
        code.add_line(
            "public %s %s(%s element) {",
            self.metadata.builder,
            add_method(self.property),
            self.descriptor.parameter_type,
        )
        self.field.ensure_mutable(code)
        if self.unboxed_type is not None:
            code.add_line("  this.%s.add(element);", self.property.name)
        else:
            code.add(check_not_null_preamble("element"))
            code.add_line("  this.%s.add(%s);", self.property.name, check_not_null_inline("element"))
        code.add_line("  return (%s) this;", self.metadata.builder)
        code.add_line("}")

    def add_varargs_add(self, code: SourceBuilder) -> None:
        self.check_features(code)
        code.add_line("")
        code.add_line("/**")
        code.add_line(" * Adds each element of {@code elements} to the list to be returned from")
        code.add_line(" * %s.", self._getter_link())
        code.add_line(" *")
        code.add_line(" * @return this {@code %s} object", self._builder_simple_name())
        if self.unboxed_type is None:
            code.add_line(" * @throws NullPointerException if {@code elements} is null or contains a")
            code.add_line(" *     null element")
        code.add_line(" */")
        code.add_line(
            "public %s %s(%s... elements) {",
            self.metadata.builder,
            add_method(self.property),
            self.descriptor.parameter_type,
        )
        array_utils = self.features.array_utils(self.descriptor.parameter_type)
        if array_utils is not None:
            code.add_line("  return %s(%s.asList(elements));", add_all_method(self.property), array_utils)
        else:
            if self.unboxed_type is None:
                raise MissingFeatureError(
                    feature="array-to-list view",
                    context=f"varargs {add_method(self.property)}({self.element_type})",
                )
            # Primitive type, Guava not available
            self.field.reserve_capacity(code, "  ", "elements.length")
            code.add_line("  for (%s element : elements) {", self.unboxed_type)
            code.add_line("    %s(element);", add_method(self.property))
            code.add_line("  }")
            code.add_line("  return (%s) this;", self.metadata.builder)
        code.add_line("}")

    def _add_javadoc_for_add_all(self, code: SourceBuilder) -> None:
        code.add_line("")
        code.add_line("/**")
        code.add_line(" * Adds each element of {@code elements} to the list to be returned from")
        code.add_line(" * %s.", self._getter_link())
        code.add_line(" *")
        code.add_line(" * <p>Elements are appended in encounter order. If a null element is found,")
        code.add_line(" * the elements before it have already been added and are not removed.")
        code.add_line(" *")
        code.add_line(" * @return this {@code %s} object", self._builder_simple_name())
        code.add_line(" * @throws NullPointerException if {@code elements} is null or contains a")
        code.add_line(" *     null element")
        code.add_line(" */")

    def add_pre_streams_add_all(self, code: SourceBuilder) -> None:
        self.check_features(code)
        self._add_javadoc_for_add_all(code)
        self.add_accessor_annotations(code)
        code.add_line(
            "public %s %s(%s<? extends %s> elements) {",
            self.metadata.builder,
            add_all_method(self.property),
            java.ITERABLE,
            self.element_type,
        )
        code.add_line("  if (elements instanceof %s) {", java.COLLECTION)
        code.add_line("    int elementsSize = ((%s<?>) elements).size();", java.COLLECTION)
        self.field.reserve_capacity(code, "    ", "elementsSize", nonzero_guard="elementsSize != 0")
        code.add_line("  }")
        code.add(for_each(self.descriptor.parameter_type, "elements", add_method(self.property)))
        code.add_line("  return (%s) this;", self.metadata.builder)
        code.add_line("}")

    def add_spliterator_add_all(self, code: SourceBuilder) -> None:
        self.check_features(code)
        spliterator = self.features.spliterator()
        if spliterator is None:
            raise MissingFeatureError(feature="java.util.Spliterator", context=add_all_method(self.property))
        self._add_javadoc_for_add_all(code)
        code.add_line(
            "public %s %s(%s<? extends %s> elements) {",
            self.metadata.builder,
            add_all_method(self.property),
            spliterator,
            self.element_type,
        )
        code.add_line("  if ((elements.characteristics() & %s.SIZED) != 0) {", spliterator)
        code.add_line("    long elementsSize = elements.estimateSize();")
        code.add_line("    if (elementsSize > 0 && elementsSize <= %s.MAX_VALUE) {", java.INTEGER)
        self.field.reserve_capacity(code, "      ", "(int) elementsSize")
        code.add_line("    }")
        code.add_line("  }")
        code.add_line("  elements.forEachRemaining(this::%s);", add_method(self.property))
        code.add_line("  return (%s) this;", self.metadata.builder)
        code.add_line("}")

    def add_stream_add_all(self, code: SourceBuilder) -> None:
        self.check_features(code)
        base_stream = self.features.base_stream()
        if base_stream is None:
            raise MissingFeatureError(feature="java.util.stream.BaseStream", context=add_all_method(self.property))
        self._add_javadoc_for_add_all(code)
        code.add_line(
            "public %s %s(%s<? extends %s, ?> elements) {",
            self.metadata.builder,
            add_all_method(self.property),
            base_stream,
            self.element_type,
        )
        code.add_line("  return %s(elements.spliterator());", add_all_method(self.property))
        code.add_line("}")

    def add_iterable_add_all(self, code: SourceBuilder) -> None:
        self.check_features(code)
        self._add_javadoc_for_add_all(code)
        self.add_accessor_annotations(code)
        code.add_line(
            "public %s %s(%s<? extends %s> elements) {",
            self.metadata.builder,
            add_all_method(self.property),
            java.ITERABLE,
            self.element_type,
        )
        code.add_line("  return %s(elements.spliterator());", add_all_method(self.property))
        code.add_line("}")

    def add_mutate(self, code: SourceBuilder) -> None:
        self.check_features(code)
        consumer = self.features.consumer()
        if consumer is None:
            return
        code.add_line("")
        code.add_line("/**")
        code.add_line(" * Applies {@code mutator} to the list to be returned from %s.", self._getter_link())
        code.add_line(" *")
        code.add_line(" * <p>This method mutates the list in-place. {@code mutator} is a void")
        code.add_line(" * consumer, so any value returned from a lambda will be ignored. Take care")
        code.add_line(" * not to call pure functions, like %s.", javadoc_no_arg_method_link(java.COLLECTION, "stream"))
        code.add_line(" *")
        code.add_line(" * @return this {@code %s} object", self._builder_simple_name())
        code.add_line(" * @throws NullPointerException if {@code mutator} is null")
        code.add_line(" */")
        code.add_line(
            "public %s %s(%s<? super %s<%s>> mutator) {",
            self.metadata.builder,
            mutator(self.property),
            consumer,
            java.LIST,
            self.element_type,
        )
        self.field.ensure_mutable(code)
        if self.overrides_add_method:
            code.add_line(
                "  mutator.accept(new %s%s(%s, this::%s));",
                checked_list.CHECKED_LIST,
                self.features.diamond_operator(self.element_type),
                self.property.name,
                add_method(self.property),
            )
        else:
            code.add_line(
                "  // If %s is overridden, this method will be updated to delegate to it",
                add_method(self.property),
            )
            code.add_line("  mutator.accept(%s);", self.property.name)
        code.add_line("  return (%s) this;", self.metadata.builder)
        code.add_line("}")

    def add_clear(self, code: SourceBuilder) -> None:
        self.check_features(code)
        code.add_line("")
        code.add_line("/**")
        code.add_line(" * Clears the list to be returned from %s.", self._getter_link())
        code.add_line(" *")
        code.add_line(" * @return this {@code %s} object", self._builder_simple_name())
        code.add_line(" */")
        code.add_line("public %s %s() {", self.metadata.builder, clear_method(self.property))
        self.field.add_clear(code)
        code.add_line("  return (%s) this;", self.metadata.builder)
        code.add_line("}")

    def add_getter(self, code: SourceBuilder) -> None:
        self.check_features(code)
        code.add_line("")
        code.add_line("/**")
        code.add_line(" * Returns an unmodifiable view of the list that will be returned by")
        code.add_line(" * %s.", self._getter_link())
        code.add_line(" * Changes to this builder will be reflected in the view.")
        code.add_line(" */")
        code.add_line("public %s<%s> %s() {", java.LIST, self.element_type, getter(self.property))
        self.field.ensure_mutable(code)
        code.add_line("  return %s.unmodifiableList(%s);", java.COLLECTIONS, self.property.name)
        code.add_line("}")

    # ------------------------------------------------------------------
    # Value construction, merge and reset
    # ------------------------------------------------------------------
    def add_final_field_assignment(self, code: SourceBuilder, final_field: str, builder: str) -> None:
        self.check_features(code)
        self.field.add_final_assignment(code, final_field, builder)

    def add_merge_from_value(self, code: Block, value: str) -> None:
        self.check_features(code)
        self.field.add_merge_from_value(code, value)

    def add_merge_from_builder(self, code: Block, builder: str) -> None:
        self.check_features(code)
        base = upcast_to_generated_builder(code, self.metadata, builder)
        code.add_line("%s(%s.%s);", add_all_method(self.property), base, self.property.name)

    def add_set_from_result(self, code: SourceBuilder, builder: str, variable: str) -> None:
        self.check_features(code)
        code.add_line("%s.%s(%s);", builder, add_all_method(self.property), variable)

    def add_clear_field(self, code: Block) -> None:
        self.check_features(code)
        code.add_line("%s();", clear_method(self.property))

    def get_static_excerpts(self) -> Tuple[StaticExcerpt, ...]:
        excerpts: List[StaticExcerpt] = list(self.field.static_excerpts())
        # CheckedList is only referenced from mutate, which needs Consumer
        if self.overrides_add_method and self.features.consumer() is not None:
            excerpts.extend(checked_list.excerpts())
        return tuple(excerpts)


class _ImmutableListMethod(StaticExcerpt):
    def __init__(self):
        super().__init__(ExcerptKind.METHOD, "immutableList")

    def add_to(self, code: SourceBuilder) -> None:
        code.add_line(render_template(
            "java/immutable_list.java.j2",
            list=code.render(java.LIST),
            collections=code.render(java.COLLECTIONS),
            arrays=code.render(java.ARRAYS),
            suppress_warnings=code.render(java.SUPPRESS_WARNINGS),
        ))


IMMUTABLE_LIST_METHOD = _ImmutableListMethod()
