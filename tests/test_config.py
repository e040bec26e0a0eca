from core.config import DEFAULT_API_URL, Settings, get_settings


def test_trailing_slashes_are_stripped():
    assert Settings(API_URL="http://example.com/api///").API_URL == "http://example.com/api"


def test_blank_url_falls_back_to_default():
    assert Settings(API_URL="  ").API_URL == DEFAULT_API_URL


def test_default_url(monkeypatch):
    monkeypatch.delenv("API_URL", raising=False)
    assert Settings(_env_file=None).API_URL == "http://localhost:3001/api"


def test_url_is_read_from_environment(monkeypatch):
    monkeypatch.setenv("API_URL", "https://quiz.example.org/api/")
    get_settings.cache_clear()
    try:
        assert get_settings().API_URL == "https://quiz.example.org/api"
    finally:
        get_settings.cache_clear()
