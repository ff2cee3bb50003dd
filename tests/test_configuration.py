import pytest

from chatglot import configuration
from chatglot.errors import TranslationProviderConfigurationError


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    for key in list(configuration.ChatglotConfig.__field_infos__):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    configuration._load_config_instance.cache_clear()
    yield
    configuration._load_config_instance.cache_clear()


def test_environment_overrides_default_language(monkeypatch, tmp_path):
    monkeypatch.setenv("CHATGLOT_DEFAULT_LANGUAGE", "fr")

    settings = configuration.get_settings(app_dir=tmp_path)

    assert settings.CHATGLOT_DEFAULT_LANGUAGE == "fr"
    assert settings.CHATGLOT_ENDPOINT == configuration.DEFAULT_ENDPOINT


def test_dotenv_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("CHATGLOT_DEFAULT_LANGUAGE=de\n")

    settings = configuration.get_settings(app_dir=tmp_path)

    assert settings.CHATGLOT_DEFAULT_LANGUAGE == "de"


def test_invalid_endpoint(monkeypatch, tmp_path):
    monkeypatch.setenv("CHATGLOT_ENDPOINT", "ftp://translate.example")

    with pytest.raises(TranslationProviderConfigurationError):
        configuration.get_settings(app_dir=tmp_path)
