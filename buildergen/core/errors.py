"""Generation-time errors.

Non-applicability is never an error: factories return ``None`` for properties
they do not handle. Everything below signals a broken invariant and must stop
generation before any incorrect source is emitted.
"""

from __future__ import annotations

from typing import Optional, Tuple


class GenerationError(RuntimeError):
    pass


class InvalidFeatureModelError(GenerationError):
    def __init__(self, message: str):
        super().__init__(f"Invalid feature model: {message}")


class MissingFeatureError(GenerationError):
    def __init__(self, *, feature: str, context: str):
        self.feature = feature
        self.context = context
        super().__init__(f"{feature} is required to generate {context} but is not available")


class FeatureMismatchError(GenerationError):
    def __init__(self, *, expected: object, actual: object):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Source buffer features {actual!r} differ from generator features {expected!r}"
        )


class ExcerptConflictError(GenerationError):
    def __init__(self, *, key: Tuple[str, str], existing: str, incoming: str, source: Optional[str] = None):
        self.key = key
        self.existing = existing
        self.incoming = incoming
        where = f" (from {source})" if source else ""
        super().__init__(f"Static excerpt {key[0]}:{key[1]} registered with different content{where}")
