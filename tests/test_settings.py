"""Tests for settings providers."""

import pytest

from whoa.exceptions import (
    AlreadyRegisteredSettingsError,
    AmbiguousSettingsError,
    InvalidSettingsClassError,
    NotRegisteredSettingsError,
)
from whoa.settings import FileSettingsProvider, InstanceSettingsProvider, Settings

from conftest import fixture_path


class BaseMailSettings(Settings):
    def get(self, app_config):
        return {"host": app_config.get("mail_host", "localhost"), "port": 25}


class SecureMailSettings(BaseMailSettings):
    def get(self, app_config):
        settings = super().get(app_config)
        settings["port"] = 465
        return settings


class QueueSettings(Settings):
    def get(self, app_config):
        return {"queue": "default"}


class OtherMailSettings(BaseMailSettings):
    def get(self, app_config):
        return {"host": "other", "port": 2525}


class TestInstanceSettingsProvider:
    """Settings lookup by class hierarchy."""

    def test_get_by_own_class(self):
        provider = InstanceSettingsProvider({"mail_host": "mail.example.com"})
        provider.register(BaseMailSettings())

        assert provider.has(BaseMailSettings)
        assert provider.get(BaseMailSettings) == {"host": "mail.example.com", "port": 25}

    def test_get_by_base_class_returns_child(self):
        provider = InstanceSettingsProvider({})
        provider.register(BaseMailSettings()).register(SecureMailSettings())

        assert provider.get(BaseMailSettings)["port"] == 465
        assert provider.get(SecureMailSettings)["port"] == 465

    def test_registration_order_does_not_matter(self):
        provider = InstanceSettingsProvider({})
        provider.register(SecureMailSettings()).register(BaseMailSettings())

        assert provider.get(BaseMailSettings)["port"] == 465

    def test_settings_is_ambiguous_for_unrelated_children(self):
        provider = InstanceSettingsProvider({})
        provider.register(SecureMailSettings()).register(OtherMailSettings())

        assert provider.is_ambiguous(BaseMailSettings)
        assert not provider.has(BaseMailSettings)
        with pytest.raises(AmbiguousSettingsError):
            provider.get(BaseMailSettings)

        assert provider.get(OtherMailSettings)["port"] == 2525

    def test_not_registered(self):
        provider = InstanceSettingsProvider({})
        provider.register(QueueSettings())

        with pytest.raises(NotRegisteredSettingsError) as exc_info:
            provider.get(BaseMailSettings)

        assert "BaseMailSettings" in str(exc_info.value)

    def test_register_twice_raises(self):
        provider = InstanceSettingsProvider({})
        provider.register(QueueSettings())

        with pytest.raises(AlreadyRegisteredSettingsError):
            provider.register(QueueSettings())

    def test_settings_built_once(self):
        calls = []

        class CountingSettings(Settings):
            def get(self, app_config):
                calls.append(1)
                return {"value": len(calls)}

        provider = InstanceSettingsProvider({})
        provider.register(CountingSettings())

        assert provider.get(CountingSettings) == {"value": 1}
        assert provider.get(CountingSettings) == {"value": 1}
        assert len(calls) == 1

    def test_is_registered(self):
        provider = InstanceSettingsProvider({})
        provider.register(SecureMailSettings())

        assert provider.is_registered(SecureMailSettings)
        assert provider.is_registered(BaseMailSettings)
        assert not provider.is_registered(QueueSettings)

    def test_data_can_be_cached_and_restored(self):
        provider = InstanceSettingsProvider({"mail_host": "cached"})
        provider.register(BaseMailSettings()).register(SecureMailSettings())
        data = provider.get_data()

        restored = InstanceSettingsProvider({}).set_data(data)

        assert restored.get(BaseMailSettings) == {"host": "cached", "port": 465}
        assert restored.get_application_configuration() == {"mail_host": "cached"}

    def test_shared_settings_data_index(self):
        """Base and child classes point to the same settings data."""
        provider = InstanceSettingsProvider({})
        provider.register(SecureMailSettings())

        settings_map = provider.get_settings_map()
        assert settings_map[BaseMailSettings] == settings_map[SecureMailSettings]
        assert Settings not in provider.get_ambiguous_map()


class TestFileSettingsProvider:
    """Settings discovered in Python files."""

    def test_load_from_folder(self):
        from whoa.packages.application import ApplicationSettings

        provider = FileSettingsProvider({"app": {"name": "Configured"}})
        provider.load(fixture_path("settings", "*.py"))

        settings = provider.get(ApplicationSettings)
        assert settings[ApplicationSettings.KEY_APP_NAME] == "Fixture Application"

    def test_imported_classes_are_not_registered_twice(self):
        from fixtures.settings.application import FixtureApplicationSettings

        provider = FileSettingsProvider({})
        provider.load(fixture_path("settings", "*.py"))

        assert provider.is_registered(FixtureApplicationSettings)
        assert len(provider.get_settings_data()) == 1

    def test_empty_pattern(self, tmp_path):
        provider = FileSettingsProvider({})
        provider.load(str(tmp_path / "*.py"))

        assert provider.get_settings_map() == {}

    def test_settings_with_required_parameters_are_rejected(self, tmp_path):
        (tmp_path / "bad_settings.py").write_text(
            "from whoa.settings import Settings\n"
            "\n"
            "\n"
            "class NeedsArgumentSettings(Settings):\n"
            "    def __init__(self, value):\n"
            "        self.value = value\n"
            "\n"
            "    def get(self, app_config):\n"
            "        return {'value': self.value}\n"
        )

        provider = FileSettingsProvider({})
        with pytest.raises(InvalidSettingsClassError) as exc_info:
            provider.load(str(tmp_path / "*.py"))

        assert "NeedsArgumentSettings" in str(exc_info.value)
