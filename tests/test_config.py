from storagehub.config import Settings


def test_defaults(monkeypatch):
    for name in ("DATABASE_URL", "ALLOW_ORIGINS", "PORT", "DRIVE_TIMEOUT", "DATABASE_SSL_NO_VERIFY"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()
    assert settings.database_url == "sqlite:///./storagehub.db"
    assert settings.allow_origins == ["*"]
    assert settings.port == 8080
    assert settings.drive_timeout is None
    assert settings.database_ssl_no_verify is True


def test_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgres://u:p@db/files")
    monkeypatch.setenv("ALLOW_ORIGINS", "https://a.app, https://b.app,")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("DRIVE_TIMEOUT", "12.5")
    monkeypatch.setenv("DATABASE_SSL_NO_VERIFY", "false")

    settings = Settings.from_env()
    assert settings.database_url == "postgresql://u:p@db/files"
    assert settings.allow_origins == ["https://a.app", "https://b.app"]
    assert settings.port == 9000
    assert settings.drive_timeout == 12.5
    assert settings.database_ssl_no_verify is False
