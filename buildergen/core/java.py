from __future__ import annotations

from typing import Dict

from buildergen.core.types import QualifiedName

# java.lang
NULL_POINTER_EXCEPTION = QualifiedName.of("java.lang", "NullPointerException")
SUPPRESS_WARNINGS = QualifiedName.of("java.lang", "SuppressWarnings")
ITERABLE = QualifiedName.of("java.lang", "Iterable")
INTEGER = QualifiedName.of("java.lang", "Integer")
OVERRIDE = QualifiedName.of("java.lang", "Override")

# java.util
ABSTRACT_LIST = QualifiedName.of("java.util", "AbstractList")
ARRAY_LIST = QualifiedName.of("java.util", "ArrayList")
ARRAYS = QualifiedName.of("java.util", "Arrays")
COLLECTION = QualifiedName.of("java.util", "Collection")
COLLECTIONS = QualifiedName.of("java.util", "Collections")
LIST = QualifiedName.of("java.util", "List")
OBJECTS = QualifiedName.of("java.util", "Objects")
RANDOM_ACCESS = QualifiedName.of("java.util", "RandomAccess")
SPLITERATOR = QualifiedName.of("java.util", "Spliterator")

# java 8
BASE_STREAM = QualifiedName.of("java.util.stream", "BaseStream")
STREAM = QualifiedName.of("java.util.stream", "Stream")
CONSUMER = QualifiedName.of("java.util.function", "Consumer")

# guava
IMMUTABLE_LIST = QualifiedName.of("com.google.common.collect", "ImmutableList")
PRECONDITIONS = QualifiedName.of("com.google.common.base", "Preconditions")

GUAVA_PRIMITIVE_UTILS: Dict[str, QualifiedName] = {
    "boolean": QualifiedName.of("com.google.common.primitives", "Booleans"),
    "byte": QualifiedName.of("com.google.common.primitives", "Bytes"),
    "short": QualifiedName.of("com.google.common.primitives", "Shorts"),
    "int": QualifiedName.of("com.google.common.primitives", "Ints"),
    "long": QualifiedName.of("com.google.common.primitives", "Longs"),
    "char": QualifiedName.of("com.google.common.primitives", "Chars"),
    "float": QualifiedName.of("com.google.common.primitives", "Floats"),
    "double": QualifiedName.of("com.google.common.primitives", "Doubles"),
}
