import pytest

from core.config import DEFAULT_API_PATH, WagtailConfig, get_config
from core.errors import ConfigurationError


@pytest.mark.parametrize("base_url", ["http://h", "http://h/"])
@pytest.mark.parametrize("fragment", ["pages/", "/pages/"])
def test_build_url_is_slash_insensitive(base_url, fragment):
    config = WagtailConfig(base_url=base_url)
    assert config.build_url(fragment, {}) == "http://h/api/v2/pages/"


@pytest.mark.parametrize("api_path", ["/api/v2", "api/v2", "/api/v2/", "api/v2/"])
def test_build_url_normalizes_api_path(api_path):
    config = WagtailConfig(base_url="https://cms.example.com/", api_path=api_path)
    assert config.build_url("/documents/12/") == "https://cms.example.com/api/v2/documents/12/"


def test_build_url_appends_params_in_insertion_order():
    config = WagtailConfig(base_url="http://h")
    url = config.build_url("pages/", {"search": "blog post", "limit": 10, "offset": 0})
    assert url == "http://h/api/v2/pages/?search=blog+post&limit=10&offset=0"


def test_build_url_without_base_url_raises():
    config = WagtailConfig(base_url=None)
    with pytest.raises(ConfigurationError, match="WAGTAIL_BASE_URL"):
        config.build_url("pages/", {})


def test_headers_only_carry_bearer_when_key_present():
    assert WagtailConfig(base_url="http://h").headers() == {"Accept": "application/json"}
    headers = WagtailConfig(base_url="http://h", api_key="abc").headers()
    assert headers["Authorization"] == "Bearer abc"
    assert headers["Accept"] == "application/json"


def test_from_env_reads_settings_and_defaults():
    config = WagtailConfig.from_env({"WAGTAIL_BASE_URL": " https://cms.example.com "})
    assert config.base_url == "https://cms.example.com"
    assert config.api_path == DEFAULT_API_PATH
    assert config.api_key is None
    assert config.timeout_seconds == 12.0


def test_from_env_treats_blank_key_as_unset():
    config = WagtailConfig.from_env({
        "WAGTAIL_BASE_URL": "http://h",
        "WAGTAIL_API_PATH": "/custom/api/",
        "WAGTAIL_API_KEY": "   ",
        "WAGTAIL_TIMEOUT_SECONDS": "3.5",
    })
    assert config.api_key is None
    assert config.api_path == "/custom/api/"
    assert config.timeout_seconds == 3.5
    assert config.build_url("pages/") == "http://h/custom/api/pages/"


@pytest.mark.parametrize("raw", ["soon", "0", "-2"])
def test_from_env_rejects_bad_timeout(raw):
    with pytest.raises(ConfigurationError, match="WAGTAIL_TIMEOUT_SECONDS"):
        WagtailConfig.from_env({"WAGTAIL_BASE_URL": "http://h", "WAGTAIL_TIMEOUT_SECONDS": raw})


def test_get_config_is_built_once(monkeypatch):
    monkeypatch.setenv("WAGTAIL_BASE_URL", "http://first")
    first = get_config()
    monkeypatch.setenv("WAGTAIL_BASE_URL", "http://second")
    assert get_config() is first
    assert first.base_url == "http://first"
