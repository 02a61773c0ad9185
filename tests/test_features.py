"""
Feature model unit tests.
"""
from __future__ import annotations

import pytest

from buildergen.core import java
from buildergen.core.errors import InvalidFeatureModelError
from buildergen.core.features import FeatureModel, SourceLevel
from buildergen.core.source import SourceBuilder
from buildergen.core.types import TypeRef

STRING = TypeRef.declared("java.lang.String")


def test_defaults_are_java8_with_guava():
    f = FeatureModel()
    assert f.guava is True
    assert f.source_level is SourceLevel.JAVA_8
    assert f.lazy_iteration
    assert f.consumer() == java.CONSUMER
    assert f.spliterator() == java.SPLITERATOR
    assert f.base_stream() == java.BASE_STREAM


def test_source_level_is_coerced_from_int():
    assert FeatureModel(source_level=7).source_level is SourceLevel.JAVA_7


def test_unknown_source_level_is_rejected():
    with pytest.raises(InvalidFeatureModelError):
        FeatureModel(source_level=5)


def test_function_package_requires_java8():
    with pytest.raises(InvalidFeatureModelError):
        FeatureModel(source_level=7, function_package=True)


def test_function_package_can_be_disabled_on_java8():
    f = FeatureModel(function_package=False)
    assert f.consumer() is None
    assert f.lazy_iteration


def test_pre_java8_has_no_lazy_iteration_or_consumer():
    f = FeatureModel(source_level=7)
    assert not f.lazy_iteration
    assert f.spliterator() is None
    assert f.base_stream() is None
    assert f.consumer() is None


def test_array_utils_for_declared_types_is_arrays():
    assert FeatureModel(guava=False).array_utils(STRING) == java.ARRAYS
    assert FeatureModel(guava=True).array_utils(STRING) == java.ARRAYS


def test_array_utils_for_primitives_needs_guava():
    assert FeatureModel(guava=True).array_utils(TypeRef.primitive("int")) == java.GUAVA_PRIMITIVE_UTILS["int"]
    assert FeatureModel(guava=False).array_utils(TypeRef.primitive("int")) is None


@pytest.mark.parametrize("level,expected", [(6, "<String>"), (7, "<>"), (8, "<>")])
def test_diamond_operator(level, expected):
    f = FeatureModel(source_level=level)
    code = SourceBuilder(f)
    code.add("%s", f.diamond_operator(STRING))
    assert str(code) == expected


def test_describe_is_json_friendly():
    assert FeatureModel(guava=False, source_level=7).describe() == {
        "guava": False,
        "source_level": 7,
        "function_package": False,
        "lazy_iteration": False,
    }
