from kestrel.di import DISettings


def test_di_settings_defaults():
    settings = DISettings.load()

    assert settings.reject_duplicate_registrations is False
    assert settings.log_resolutions is False


def test_di_settings_from_environment(monkeypatch):
    monkeypatch.setenv("KESTREL_DI_REJECT_DUPLICATE_REGISTRATIONS", "1")
    monkeypatch.setenv("KESTREL_DI_LOG_RESOLUTIONS", "yes")

    settings = DISettings.load()

    assert settings.reject_duplicate_registrations is True
    assert settings.log_resolutions is True
