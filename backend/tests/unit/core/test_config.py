"""
Unit Tests for configuration inspection
"""
from app.core.config import (
    INSECURE_ADMIN_PASSWORD,
    INSECURE_JWT_SECRET,
    Settings,
    inspect_settings,
    parse_cors_origins,
)


def make_settings(**overrides) -> Settings:
    values = {
        "ENVIRONMENT": "development",
        "DATABASE_URL": "sqlite+aiosqlite:///./campus.db",
        "JWT_SECRET_KEY": "a-real-secret",
        "ADMIN_USERNAME": "admin",
        "ADMIN_PASSWORD": "a-real-password",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestInspectSettings:

    def test_secure_settings_pass_cleanly(self):
        report = inspect_settings(make_settings())

        assert report.ok
        assert report.errors == []
        assert report.warnings == []

    def test_insecure_defaults_warn_in_development(self):
        report = inspect_settings(make_settings(
            JWT_SECRET_KEY=INSECURE_JWT_SECRET,
            ADMIN_PASSWORD=INSECURE_ADMIN_PASSWORD,
        ))

        assert report.ok
        assert len(report.warnings) == 2
        assert any("JWT_SECRET_KEY" in w for w in report.warnings)
        assert any("ADMIN_PASSWORD" in w for w in report.warnings)

    def test_insecure_defaults_fail_in_production(self):
        report = inspect_settings(make_settings(
            ENVIRONMENT="production",
            JWT_SECRET_KEY=INSECURE_JWT_SECRET,
        ))

        assert not report.ok
        assert any("JWT_SECRET_KEY" in e for e in report.errors)

    def test_debug_in_production_is_a_warning(self):
        report = inspect_settings(make_settings(ENVIRONMENT="production", DEBUG=True))

        assert report.ok
        assert report.warnings == ["DEBUG is enabled in production"]

    def test_missing_admin_credentials_is_an_error(self):
        report = inspect_settings(make_settings(ADMIN_PASSWORD=""))

        assert not report.ok
        assert "ADMIN_USERNAME and ADMIN_PASSWORD must both be set" in report.errors

    def test_missing_secret_and_database_are_errors(self):
        report = inspect_settings(make_settings(JWT_SECRET_KEY="", DATABASE_URL=""))

        assert "JWT_SECRET_KEY is not set" in report.errors
        assert "DATABASE_URL is not set" in report.errors

    def test_non_positive_expiry_is_an_error(self):
        report = inspect_settings(make_settings(ACCESS_TOKEN_EXPIRE_MINUTES=0))

        assert "ACCESS_TOKEN_EXPIRE_MINUTES must be positive" in report.errors

    def test_inspection_does_not_mutate_snapshot(self):
        snapshot = make_settings(JWT_SECRET_KEY=INSECURE_JWT_SECRET)

        inspect_settings(snapshot)

        assert snapshot.JWT_SECRET_KEY == INSECURE_JWT_SECRET


class TestCorsOrigins:

    def test_comma_separated(self):
        assert parse_cors_origins("http://a.test, http://b.test,") == ["http://a.test", "http://b.test"]

    def test_json_list(self):
        assert parse_cors_origins('["http://a.test"]') == ["http://a.test"]

    def test_settings_property(self):
        assert make_settings(CORS_ORIGINS_STR="http://x.test").CORS_ORIGINS == ["http://x.test"]
