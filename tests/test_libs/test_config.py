# tests/test_libs/test_config.py


###### IMPORT TOOLS ######
# global imports
import pytest
from pydantic import ValidationError

# local imports
from apps.benchmark.src.core.config import BenchmarkSettings
from apps.generator.src.core.config import GeneratorSettings
from apps.ingestion.src.core.config import IngestionSettings
from libs.config import AppConfig


###### TESTS ######
def test_defaults():
    cfg = AppConfig()
    assert cfg.aws.region == "eu-west-1"
    assert cfg.firehose.delivery_stream == "showdown-athena-analytic-page-views-firehose"
    assert cfg.athena.table == "page_views"


def test_nested_env_overrides(monkeypatch):
    monkeypatch.setenv("TIMESTREAM__DATABASE", "other-db")
    monkeypatch.setenv("AWS__REGION", "us-east-1")

    cfg = AppConfig()

    assert cfg.timestream.database == "other-db"
    assert cfg.aws.region == "us-east-1"


def test_service_settings_read_prefixed_env(monkeypatch):
    monkeypatch.setenv("GENERATOR__CHUNK_SIZE", "50")
    monkeypatch.setenv("INGESTION__MAX_ROWS", "250")
    monkeypatch.setenv("BENCHMARK__RUNS", "3")

    assert GeneratorSettings().chunk_size == 50
    assert IngestionSettings().max_rows == 250
    assert BenchmarkSettings().runs == 3


@pytest.mark.parametrize("field", ["same_user_probability", "same_session_probability", "same_page_probability"])
def test_probabilities_are_bounded(field):
    with pytest.raises(ValidationError):
        GeneratorSettings(**{field: 1.5})


def test_runs_must_be_positive():
    with pytest.raises(ValidationError):
        BenchmarkSettings(runs=0)


class _StrictConfig(AppConfig):
    chunk_retries: int = 3


def test_load_wraps_validation_errors(monkeypatch):
    monkeypatch.setenv("CHUNK_RETRIES", "many")
    _StrictConfig.load.cache_clear()

    with pytest.raises(RuntimeError, match="Invalid configuration values.") as excinfo:
        _StrictConfig.load()

    assert isinstance(excinfo.value.__cause__, ValidationError)
    _StrictConfig.load.cache_clear()


def test_load_is_cached(monkeypatch):
    monkeypatch.setenv("AWS__REGION", "us-west-2")
    AppConfig.load.cache_clear()
    try:
        first = AppConfig.load()
        assert first.aws.region == "us-west-2"
        assert AppConfig.load() is first
    finally:
        AppConfig.load.cache_clear()
