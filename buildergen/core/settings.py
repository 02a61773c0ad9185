from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from buildergen.core.errors import InvalidFeatureModelError
from buildergen.core.features import FeatureModel

_TRUE = ("1", "true", "yes")


def _flag(name: str, default: str) -> bool:
    return (os.getenv(name) or default).strip().lower() in _TRUE


def _optional_flag(name: str) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip().lower() in _TRUE


@dataclass(frozen=True)
class Settings:
    env: str
    guava: bool
    source_level: int
    function_package: Optional[bool]
    shorten_imports: bool
    log_level: str

    def default_features(self) -> FeatureModel:
        return FeatureModel(
            guava=self.guava,
            source_level=self.source_level,
            function_package=self.function_package,
        )


def _source_level() -> int:
    raw = (os.getenv("BUILDERGEN_SOURCE_LEVEL") or "8").strip()
    try:
        return int(raw)
    except ValueError:
        raise InvalidFeatureModelError(f"unsupported source level {raw!r}") from None


def _log_level() -> str:
    return (os.getenv("BUILDERGEN_LOG_LEVEL") or "INFO").strip().upper()


def load_settings() -> Settings:
    """Read BUILDERGEN_* environment variables; missing ones fall back to defaults."""
    return Settings(
        env=(os.getenv("BUILDERGEN_ENV") or "dev").strip().lower(),
        guava=_flag("BUILDERGEN_GUAVA", "1"),
        source_level=_source_level(),
        function_package=_optional_flag("BUILDERGEN_FUNCTION_PACKAGE"),
        shorten_imports=_flag("BUILDERGEN_SHORTEN_IMPORTS", "1"),
        log_level=_log_level(),
    )


def configure_logging(level: Optional[str] = None) -> None:
    """Reads only BUILDERGEN_LOG_LEVEL; feature settings are parsed per request."""
    level = level or _log_level()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
