import pytest

from janis_request.config import Settings
from janis_request.utils import is_array, is_boolean, is_number, is_object, is_string


class TestValidators:
    @pytest.mark.parametrize("value", [lambda: False, float("nan"), {}, "", "Janis", None])
    def test_is_boolean_false(self, value):
        assert is_boolean(value) is False

    def test_is_boolean_true(self):
        assert is_boolean(False) is True

    @pytest.mark.parametrize("value", [3, float("nan"), [], {"test": 1}, None])
    def test_is_string_false(self, value):
        assert is_string(value) is False

    def test_is_string_true(self):
        assert is_string("2") is True

    @pytest.mark.parametrize("value", [3, float("nan"), [], "", "Janis", None])
    def test_is_object_false(self, value):
        assert is_object(value) is False

    def test_is_object_true(self):
        assert is_object({"client": "Janis"}) is True

    @pytest.mark.parametrize("value", [3, float("nan"), {}, "", "Janis", None])
    def test_is_array_false(self, value):
        assert is_array(value) is False

    def test_is_array_true(self):
        assert is_array(["Janis"]) is True

    @pytest.mark.parametrize("value", [lambda: False, float("nan"), {}, "", "Janis", None, True])
    def test_is_number_false(self, value):
        assert is_number(value) is False

    @pytest.mark.parametrize("value", [7, 0, 2.5])
    def test_is_number_true(self, value):
        assert is_number(value) is True


class TestSettings:
    def test_reads_prefixed_env_vars(self, monkeypatch):
        monkeypatch.setenv("JANIS_ENV", "janisqa")
        monkeypatch.setenv("JANIS_DEFAULT_PAGE_SIZE", "20")
        settings = Settings(_env_file=None)
        assert settings.env == "janisqa"
        assert settings.default_page_size == 20

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("JANIS_ENV", raising=False)
        settings = Settings(_env_file=None)
        assert settings.default_page == 1
        assert settings.default_page_size == 60
        assert settings.request_timeout == 60.0
        assert "in.janis.picking" in settings.analytics_packages

    def test_only_request_settings_are_declared(self):
        assert set(Settings.model_fields) == {
            "env",
            "request_timeout",
            "default_page",
            "default_page_size",
            "analytics_packages",
        }
