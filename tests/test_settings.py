from film_essays_site.config import Settings
from film_essays_site.models import Language


def test_settings_parses_required_fields() -> None:
    settings = Settings.model_validate({"SITE_URL": "https://kino.example"})
    assert settings.site_url == "https://kino.example"
    assert settings.default_language is Language.SK
    assert settings.related_limit == 3
    assert settings.words_per_minute == 200


def test_settings_reads_default_language() -> None:
    settings = Settings.model_validate({"SITE_URL": "https://kino.example", "DEFAULT_LANGUAGE": "en"})
    assert settings.default_language is Language.EN
