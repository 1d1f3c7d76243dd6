import json

from tracker import settings


def test_defaults_written_on_first_load(isolated_settings):
    loaded = settings.load_settings()
    assert isolated_settings.exists()
    assert [item["key"] for item in loaded] == [
        "default_rest_time",
        "weight_unit",
        "auto_start_rest_timer",
        "show_previous_workout_data",
    ]
    assert settings.get_value("default_rest_time") == 90


def test_set_value_persists(isolated_settings):
    settings.set_value("default_rest_time", 120)
    settings.set_value("theme", "dark")

    settings.clear_cache()
    assert settings.get_value("default_rest_time") == 120
    with isolated_settings.open() as fh:
        saved = json.load(fh)
    assert {"key": "theme", "value": "dark", "type": "str"} in saved


def test_explicit_path_and_fallback(tmp_path):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps([{"key": "weight_unit", "value": "lbs", "type": "str"}]))

    assert settings.get_value("weight_unit", path) == "lbs"
    # keys absent from the file use the defaults
    assert settings.get_value("auto_start_rest_timer", path) is True
    assert settings.get_value("unknown", path) is None


def test_invalid_file_replaced_by_defaults(isolated_settings):
    isolated_settings.write_text("{oops")
    loaded = settings.load_settings()
    assert loaded == settings.DEFAULT_SETTINGS
    assert json.loads(isolated_settings.read_text()) == settings.DEFAULT_SETTINGS
