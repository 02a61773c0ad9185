from .base import Config, PropertyCodeGenerator, PropertyCodeGeneratorFactory
from .list_property import ListPropertyCodeGenerator, ListPropertyDescriptor, ListPropertyFactory
from .render import GeneratedFragments, generate_list_property

__all__ = [
    "Config",
    "PropertyCodeGenerator",
    "PropertyCodeGeneratorFactory",
    "ListPropertyCodeGenerator",
    "ListPropertyDescriptor",
    "ListPropertyFactory",
    "GeneratedFragments",
    "generate_list_property",
]
