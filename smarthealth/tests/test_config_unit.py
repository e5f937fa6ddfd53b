from smarthealth.internal_core.config import DEFAULT_PREDICTION_URL, load_config


def test_load_config_defaults(monkeypatch) -> None:
    for name in (
        "SMARTHEALTH_PREDICTION_PROVIDER",
        "SMARTHEALTH_PREDICTION_URL",
        "SMARTHEALTH_PREDICTION_WIRE_KEYS",
        "SMARTHEALTH_PREDICTION_TIMEOUT_SECONDS",
        "SMARTHEALTH_CORS_ORIGINS",
        "SMARTHEALTH_TEST_INJECT_PREDICTION_FAIL",
    ):
        monkeypatch.delenv(name, raising=False)
    config = load_config()
    assert config.SMARTHEALTH_PREDICTION_PROVIDER == "http"
    assert config.SMARTHEALTH_PREDICTION_URL == DEFAULT_PREDICTION_URL
    assert config.SMARTHEALTH_PREDICTION_WIRE_KEYS == "auto"
    assert config.SMARTHEALTH_PREDICTION_TIMEOUT_SECONDS == 15.0
    assert config.SMARTHEALTH_CORS_ORIGINS == ["*"]
    assert config.SMARTHEALTH_TEST_INJECT_PREDICTION_FAIL is False


def test_load_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("SMARTHEALTH_PREDICTION_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("SMARTHEALTH_SESSION_TTL_SECONDS", "60")
    monkeypatch.setenv("SMARTHEALTH_CORS_ORIGINS", "http://a.test, http://b.test,")
    monkeypatch.setenv("SMARTHEALTH_TEST_INJECT_PREDICTION_FAIL", "yes")
    monkeypatch.setenv("SMARTHEALTH_PREDICTION_WIRE_KEYS", " Legacy ")
    config = load_config()
    assert config.SMARTHEALTH_PREDICTION_TIMEOUT_SECONDS == 2.5
    assert config.SMARTHEALTH_SESSION_TTL_SECONDS == 60
    assert config.SMARTHEALTH_CORS_ORIGINS == ["http://a.test", "http://b.test"]
    assert config.SMARTHEALTH_TEST_INJECT_PREDICTION_FAIL is True
    assert config.SMARTHEALTH_PREDICTION_WIRE_KEYS == "legacy"
