from __future__ import annotations

from edit_engine.config import EditorSettings


def test_defaults_without_environment() -> None:
    settings = EditorSettings.from_env({})

    assert settings == EditorSettings()
    assert settings.status_timeout_s == 5.0
    assert settings.placeholder == "~"


def test_environment_overrides() -> None:
    settings = EditorSettings.from_env(
        {
            "EDIT_ENGINE_STATUS_TIMEOUT": "2.5",
            "EDIT_ENGINE_NAME_WIDTH": "8",
            "EDIT_ENGINE_PLACEHOLDER": ".",
            "EDIT_ENGINE_RESERVED_ROWS": "1",
        }
    )

    assert settings.status_timeout_s == 2.5
    assert settings.name_width == 8
    assert settings.placeholder == "."
    assert settings.reserved_rows == 1


def test_invalid_values_fall_back_to_defaults() -> None:
    settings = EditorSettings.from_env(
        {
            "EDIT_ENGINE_STATUS_TIMEOUT": "soon",
            "EDIT_ENGINE_NAME_WIDTH": "wide",
            "EDIT_ENGINE_RESERVED_ROWS": "-3",
        }
    )

    assert settings.status_timeout_s == 5.0
    assert settings.name_width == 20
    assert settings.reserved_rows == 0


def test_encoding_is_normalized_and_validated() -> None:
    known = EditorSettings.from_env({"EDIT_ENGINE_ENCODING": "ASCII"})
    unknown = EditorSettings.from_env({"EDIT_ENGINE_ENCODING": "no-such-codec"})

    assert known.encoding == "ascii"
    assert unknown.encoding == "utf-8"
