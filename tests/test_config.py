import pytest

from config import DEFAULT_TASK_SUGGESTIONS, Settings, load_settings


def test_defaults_from_empty_environment():
    assert load_settings({}) == Settings()
    assert Settings().task_suggestions == DEFAULT_TASK_SUGGESTIONS


def test_values_from_environment():
    settings = load_settings(
        {
            "FOCUS_TICK_MS": "250",
            "FOCUS_LOG_LEVEL": "debug",
            "FOCUS_WINDOW_TITLE": "Deep Work",
            "FOCUS_TASK_SUGGESTIONS": "Inbox, Review ,,",
        }
    )
    assert settings.tick_ms == 250
    assert settings.log_level == "DEBUG"
    assert settings.window_title == "Deep Work"
    assert settings.task_suggestions == ("Inbox", "Review")


@pytest.mark.parametrize("raw", ["0", "-5", "fast"])
def test_invalid_tick_ms(raw):
    with pytest.raises(ValueError, match="FOCUS_TICK_MS"):
        load_settings({"FOCUS_TICK_MS": raw})


def test_invalid_log_level():
    with pytest.raises(ValueError, match="FOCUS_LOG_LEVEL"):
        load_settings({"FOCUS_LOG_LEVEL": "LOUD"})


def test_blank_title_falls_back():
    assert load_settings({"FOCUS_WINDOW_TITLE": "  "}).window_title == "Focus Timer"
