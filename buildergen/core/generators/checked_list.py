"""Validating list view handed to ``mutate`` callbacks when ``add`` is overridden."""

from __future__ import annotations

from typing import Tuple

from buildergen.core import java
from buildergen.core.errors import MissingFeatureError
from buildergen.core.excerpts import ExcerptKind, StaticExcerpt
from buildergen.core.generators.templates import render_template
from buildergen.core.source import SourceBuilder

CHECKED_LIST = "CheckedList"


class _CheckedListType(StaticExcerpt):
    def __init__(self):
        super().__init__(ExcerptKind.TYPE, CHECKED_LIST)

    def add_to(self, code: SourceBuilder) -> None:
        consumer = code.features.consumer()
        if consumer is None:
            raise MissingFeatureError(feature="java.util.function.Consumer", context=CHECKED_LIST)
        code.add_line(render_template(
            "java/checked_list.java.j2",
            list=code.render(java.LIST),
            abstract_list=code.render(java.ABSTRACT_LIST),
            random_access=code.render(java.RANDOM_ACCESS),
            consumer=code.render(consumer),
            override=code.render(java.OVERRIDE),
        ))


_EXCERPTS: Tuple[StaticExcerpt, ...] = (_CheckedListType(),)


def excerpts() -> Tuple[StaticExcerpt, ...]:
    return _EXCERPTS
