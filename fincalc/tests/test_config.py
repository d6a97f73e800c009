from fincalc.app import create_app
from fincalc.config import DEFAULT_ORIGINS, Settings


def test_settings_defaults_without_environment():
    settings = Settings.from_env({})

    assert settings.cors_origins == DEFAULT_ORIGINS
    assert settings.log_level == "INFO"
    assert settings.max_periods == 1200


def test_settings_read_from_environment():
    settings = Settings.from_env(
        {
            "FINCALC_CORS_ORIGINS": "https://a.example, https://b.example,",
            "FINCALC_LOG_LEVEL": "debug",
            "FINCALC_MAX_PERIODS": "360",
        }
    )

    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.log_level == "DEBUG"
    assert settings.max_periods == 360


def test_app_rejects_schedules_past_configured_limit():
    app = create_app(Settings(max_periods=12, log_level="WARNING"))
    client = app.test_client()

    response = client.post(
        "/api/calc/amortization",
        json={"principal": 1000, "annual_rate": 5, "term_years": 2},
    )

    assert response.status_code == 422
    assert response.json["error"] == "InvalidHorizon"
