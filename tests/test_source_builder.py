"""
Source buffer and import shortening unit tests.
"""
from __future__ import annotations

from buildergen.core.excerpts import for_each
from buildergen.core.features import FeatureModel
from buildergen.core.source import Block, Excerpt, ImportManager, SourceBuilder
from buildergen.core.types import QualifiedName, TypeRef

LIST = QualifiedName.of("java.util", "List")
AWT_LIST = QualifiedName.of("java.awt", "List")


class _Hello(Excerpt):
    def add_to(self, code):
        code.add("hello(%s)", LIST)


def _code(**kwargs) -> SourceBuilder:
    return SourceBuilder(FeatureModel(), ImportManager(**kwargs))


def test_add_line_interpolates_and_appends_newline():
    code = _code()
    code.add_line("int %s = %s;", "x", 3)
    assert str(code) == "int x = 3;\n"


def test_format_without_args_is_taken_literally():
    code = _code()
    code.add_line("x % 2")
    assert str(code) == "x % 2\n"


def test_qualified_names_are_shortened_and_imported():
    code = _code()
    code.add("%s<%s>", LIST, TypeRef.declared("java.lang.String"))
    assert str(code) == "List<String>"
    assert code.imports.imports() == ["java.util.List"]


def test_clashing_simple_names_stay_qualified():
    code = _code()
    code.add("%s %s", LIST, AWT_LIST)
    assert str(code) == "List java.awt.List"
    assert code.imports.imports() == ["java.util.List"]


def test_local_package_is_not_imported():
    code = _code(local_package="com.example")
    code.add("%s", QualifiedName.of("com.example", "Person", "Builder"))
    assert str(code) == "Person.Builder"
    assert code.imports.imports() == []


def test_unshortened_mode_renders_full_names():
    code = _code(shorten=False)
    code.add("%s", LIST)
    assert str(code) == "java.util.List"
    assert code.imports.imports() == []


def test_excerpts_render_inline_and_as_statements():
    code = _code()
    code.add("call %s;", _Hello())
    code.add(_Hello())
    assert str(code) == "call hello(List);hello(List)"


def test_subbuilder_shares_imports():
    code = _code()
    sub = code.subbuilder()
    sub.add("%s", LIST)
    assert code.imports.imports() == ["java.util.List"]
    assert code.is_empty()


def test_block_declarations_are_emitted_once_and_first():
    block = Block(FeatureModel())
    block.add_line("first();")
    name = block.declare("k", TypeRef.declared("com.example.Person_Builder"), "base", "(%s) %s",
                         QualifiedName.parse("com.example.Person_Builder"), "template")
    again = block.declare("k", TypeRef.declared("com.example.Person_Builder"), "base", "ignored")
    assert name == again == "base"
    assert str(block) == "Person_Builder base = (Person_Builder) template;\nfirst();\n"


def test_reserved_simple_names_stay_qualified():
    code = _code(reserved=("Value",))
    code.add("%s %s", QualifiedName.of("com.other", "Value"), LIST)
    assert str(code) == "com.other.Value List"
    assert code.imports.imports() == ["java.util.List"]


def test_reserve_applies_to_later_names():
    imports = ImportManager()
    imports.reserve("CheckedList")
    assert imports.shorten(QualifiedName.of("com.other", "CheckedList")) == "com.other.CheckedList"
    assert imports.shorten(QualifiedName.of("com.other", "Other")) == "Other"


def test_for_each_is_an_enhanced_for_loop():
    code = SourceBuilder(FeatureModel(source_level=6))
    code.add(for_each(TypeRef.primitive("int"), "elements", "addScores"))
    assert str(code) == "  for (int element : elements) {\n    addScores(element);\n  }\n"
