import logging

from padsampler.config import DEFAULT_API_BASE, SamplerConfig
from padsampler.logging_setup import configure_logging


def test_defaults():
    config = SamplerConfig()
    assert config.acquisition.api_base == DEFAULT_API_BASE
    assert config.acquisition.max_concurrency == 0
    assert config.trim.proximity_px == 10.0
    assert config.render.fps == 60.0
    assert config.keymap == "qwerty"

def test_from_env_overrides():
    config = SamplerConfig.from_env({
        "PADSAMPLER_API_BASE": "http://sampler.local:8080/",
        "PADSAMPLER_TIMEOUT": "5.5",
        "PADSAMPLER_MAX_CONCURRENCY": "4",
        "PADSAMPLER_FPS": "30",
        "PADSAMPLER_KEYMAP": "AZERTY",
    })
    assert config.acquisition.api_base == "http://sampler.local:8080"
    assert config.acquisition.request_timeout == 5.5
    assert config.acquisition.max_concurrency == 4
    assert config.render.fps == 30.0
    assert config.keymap == "azerty"

def test_from_env_ignores_bad_numbers(caplog):
    config = SamplerConfig.from_env({"PADSAMPLER_MAX_CONCURRENCY": "lots", "PADSAMPLER_FPS": ""})
    assert config.acquisition.max_concurrency == 0
    assert config.render.fps == 60.0
    assert "PADSAMPLER_MAX_CONCURRENCY" in caplog.text

def test_configure_logging_reads_env(monkeypatch, restore_logging):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert configure_logging() == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG
    # Request lines stay quiet even at DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING

def test_configure_logging_falls_back(monkeypatch, restore_logging):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert configure_logging(default_level="INFO") == logging.INFO

    monkeypatch.delenv("LOG_LEVEL")
    assert configure_logging() == logging.WARNING


if __name__ == "__main__":
    test_defaults()
    test_from_env_overrides()
