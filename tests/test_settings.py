"""Settings documents: YAML loading and JSON Schema validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from object_model import ObjectModel, SettingsError, ValidationError, load_settings, settings_from_dict
from object_model.caster import ignore_diagnostic
from object_model.config import ModelSettings, validate_settings_document
from object_model.config.json_schema_loader import clear_cache, get_schema_path, load_schema
from object_model.reporting import log_errors, raise_aggregated_errors


def _write(root: Path, text: str) -> Path:
    path = root / "settings.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_empty_document_gives_defaults() -> None:
    settings = settings_from_dict(None)

    assert settings.error_collector is raise_aggregated_errors
    assert settings.convention_for_private("_x")
    assert settings.convention_for_constant("MAX")
    assert not settings.convention_for_constant("max")


def test_load_settings_from_yaml(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "conventions:\n"
        "  private_prefix: '$'\n"
        "  constant_pattern: 'K_[A-Z]+'\n"
        "reporting:\n"
        "  strategy: log\n"
        "diagnostics:\n"
        "  ambiguous_cast: ignore\n",
    )

    settings = load_settings(path)

    assert settings.convention_for_private("$token")
    assert not settings.convention_for_private("_token")
    assert settings.convention_for_constant("K_MAX")
    assert not settings.convention_for_constant("MAX")
    assert settings.error_collector is log_errors
    assert settings.on_diagnostic is ignore_diagnostic


def test_loaded_conventions_drive_guarded_objects() -> None:
    settings = settings_from_dict({"conventions": {"private_prefix": "$"}})
    Session = ObjectModel({"$token": [str], "user": str}, settings=settings)

    session = Session({"$token": "t", "user": "ann"})

    assert list(session) == ["user"]
    with pytest.raises(ValidationError, match="cannot access private property \\$token"):
        session["$token"]


@pytest.mark.parametrize(
    ("document", "yaml_path"),
    [
        ({"reporting": {"strategy": "explode"}}, "/reporting/strategy"),
        ({"diagnostics": {"ambiguous_cast": "shout"}}, "/diagnostics/ambiguous_cast"),
        ({"conventions": {"private_prefix": ""}}, "/conventions/private_prefix"),
        ({"conventions": {"constant_pattern": "("}}, "/conventions/constant_pattern"),
        ({"unknown": 1}, ""),
        (["not", "a", "mapping"], ""),
    ],
)
def test_invalid_documents_are_reported(document, yaml_path) -> None:
    issues = validate_settings_document(document)

    assert [issue.yaml_path for issue in issues] == [yaml_path]
    with pytest.raises(SettingsError) as exc_info:
        settings_from_dict(document)
    assert exc_info.value.issues == issues


def test_unreadable_and_malformed_files(tmp_path: Path) -> None:
    with pytest.raises(SettingsError, match="Cannot read settings file"):
        load_settings(tmp_path / "missing.yaml")

    with pytest.raises(SettingsError, match="Invalid YAML"):
        load_settings(_write(tmp_path, "reporting: [unclosed\n"))


def test_settings_are_copied_into_models() -> None:
    settings = ModelSettings()
    Model = ObjectModel({"a": int}, settings=settings)

    Model.settings.error_collector = log_errors

    assert settings.error_collector is raise_aggregated_errors
    assert Model.extend({"b": [int]}).settings is not Model.settings


def test_schema_is_packaged_and_cached() -> None:
    clear_cache()

    assert get_schema_path("settings").is_file()
    assert load_schema() is load_schema("settings")
