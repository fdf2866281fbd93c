import pytest

from chat_translator.config.loader import ConfigLoader
from chat_translator.config.settings import (
    EngineFailurePolicy,
    Environment,
    Settings,
    TranslationSettings,
)


def test_defaults():
    settings = Settings()
    assert settings.translation.speculative_engine is False
    assert settings.translation.engine_failure_policy == EngineFailurePolicy.FALLBACK
    assert settings.assemblyai.max_polls == 20
    assert settings.assemblyai.poll_interval_seconds == 3.0
    assert settings.ocr.languages == ["en"]


def test_translation_settings_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("TRANSLATION_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TRANSLATION_SPECULATIVE_ENGINE", "true")
    monkeypatch.setenv("TRANSLATION_ENGINE_FAILURE_POLICY", "PROPAGATE")

    translation = TranslationSettings()

    assert translation.speculative_engine is True
    assert translation.engine_failure_policy == EngineFailurePolicy.PROPAGATE
    assert translation.get_data_path() == tmp_path.resolve()


def test_environment_is_case_insensitive():
    assert Settings(environment="PRODUCTION").is_production()


def test_cors_config():
    config = Settings().get_cors_config()
    assert set(config) == {"allow_origins", "allow_credentials", "allow_methods", "allow_headers"}


def test_loader_reads_environment_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env.staging").write_text("ENVIRONMENT=staging\nPORT=9001\n", encoding="utf-8")

    settings = ConfigLoader.load_environment_config("staging")

    assert settings.environment == Environment.STAGING
    assert settings.port == 9001
    assert ConfigLoader.get_available_environments() == ["staging"]
    assert ConfigLoader.validate_environment_config("staging")
    assert not ConfigLoader.validate_environment_config("production")


def test_loader_falls_back_without_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    settings = ConfigLoader.load_environment_config("testing")
    assert settings.environment == Environment.TESTING


def test_sample_env_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)

    path = ConfigLoader.create_sample_env_file("production")

    content = (tmp_path / path).read_text(encoding="utf-8")
    assert "ENVIRONMENT=production" in content
    assert "TRANSLATION_PRELOAD_MODEL=true" in content
    assert ConfigLoader.get_available_environments() == []


def test_unknown_environment_rejected():
    with pytest.raises(ValueError):
        ConfigLoader.load_environment_config("moon")
