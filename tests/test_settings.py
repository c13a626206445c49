from habitboard_backend.settings import Settings


class TestSettings:
    def test_redacted_hides_secret(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///habitboard.db")
        monkeypatch.setenv("BACKEND_SESSION_SECRET", "super-secret-token")
        monkeypatch.setenv("ALLOWED_EMAILS", "Alice@Example.com, bob@example.com")
        settings = Settings()
        values = settings.redacted()
        assert values["backend_session_secret"] == "***"
        assert "super-secret-token" not in str(values)
        assert values["database_url"] == "sqlite:///habitboard.db"
        assert settings.allowed_emails == ["alice@example.com", "bob@example.com"]
