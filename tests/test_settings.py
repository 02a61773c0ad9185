import pytest

from buildergen.core.errors import InvalidFeatureModelError
from buildergen.core.features import SourceLevel
from buildergen.core.settings import configure_logging, load_settings

ENV_VARS = (
    "BUILDERGEN_ENV",
    "BUILDERGEN_GUAVA",
    "BUILDERGEN_SOURCE_LEVEL",
    "BUILDERGEN_FUNCTION_PACKAGE",
    "BUILDERGEN_SHORTEN_IMPORTS",
    "BUILDERGEN_LOG_LEVEL",
)


@pytest.fixture()
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    s = load_settings()
    assert s.env == "dev"
    assert s.guava is True
    assert s.source_level == 8
    assert s.function_package is None
    assert s.shorten_imports is True
    assert s.log_level == "INFO"

    features = s.default_features()
    assert features.source_level is SourceLevel.JAVA_8
    assert features.has_function_package is True


def test_flags_parse_like_booleans(clean_env):
    clean_env.setenv("BUILDERGEN_GUAVA", "no")
    clean_env.setenv("BUILDERGEN_SHORTEN_IMPORTS", "0")
    clean_env.setenv("BUILDERGEN_FUNCTION_PACKAGE", "Yes")
    clean_env.setenv("BUILDERGEN_LOG_LEVEL", "debug")
    s = load_settings()
    assert s.guava is False
    assert s.shorten_imports is False
    assert s.function_package is True
    assert s.log_level == "DEBUG"


def test_blank_function_package_means_derive_from_level(clean_env):
    clean_env.setenv("BUILDERGEN_FUNCTION_PACKAGE", "  ")
    clean_env.setenv("BUILDERGEN_SOURCE_LEVEL", "7")
    features = load_settings().default_features()
    assert features.has_function_package is False
    assert features.consumer() is None


def test_inconsistent_environment_is_rejected(clean_env):
    clean_env.setenv("BUILDERGEN_SOURCE_LEVEL", "6")
    clean_env.setenv("BUILDERGEN_FUNCTION_PACKAGE", "1")
    with pytest.raises(InvalidFeatureModelError):
        load_settings().default_features()


def test_non_numeric_source_level_is_rejected(clean_env):
    clean_env.setenv("BUILDERGEN_SOURCE_LEVEL", "eight")
    with pytest.raises(InvalidFeatureModelError) as exc:
        load_settings()
    assert "'eight'" in str(exc.value)


def test_logging_setup_ignores_feature_settings(clean_env):
    clean_env.setenv("BUILDERGEN_SOURCE_LEVEL", "eight")
    configure_logging()
