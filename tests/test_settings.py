"""Tests for layered configuration in :mod:`byterate.settings`."""

import json
import textwrap

import pytest

from byterate.settings import BenchSettings, CopySettings, _to_bool


def test_defaults():
    """Without any source the dataclass defaults apply."""
    settings = CopySettings.from_sources(cli_overrides={}, env={}, settings_file=None)
    assert settings == CopySettings(interval_seconds=1.0, chunk_size=65536, print_summary=True)


def test_precedence_cli_over_env_over_file(tmp_path):
    """CLI > environment > settings file > defaults."""
    path = tmp_path / "byterate.toml"
    path.write_text(
        textwrap.dedent(
            """
            [bench]
            interval_seconds = 0.5
            chunk_size = 1024
            duration_seconds = 9.0

            [copy]
            chunk_size = 7
            """
        ).strip()
    )
    env = {
        "BYTERATE_BENCH_CHUNK_SIZE": "2048",
        "BYTERATE_BENCH_JSON_SUMMARY": "yes",
        "BYTERATE_BENCH_SUMMARY": "",
    }

    settings = BenchSettings.from_sources(
        cli_overrides={"duration_seconds": 1.5, "print_summary": None},
        env=env,
        settings_file=path,
    )

    assert settings.interval_seconds == 0.5
    assert settings.chunk_size == 2048
    assert settings.duration_seconds == 1.5
    assert settings.print_summary is True
    assert settings.json_summary is True


def test_settings_file_from_environment(tmp_path):
    """``BYTERATE_SETTINGS_FILE`` names the file when no CLI path is given."""
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"interval_seconds": 2, "unknown": "ignored"}))
    settings = CopySettings.from_sources(
        cli_overrides={},
        env={"BYTERATE_SETTINGS_FILE": str(path)},
        settings_file=None,
    )
    assert settings.interval_seconds == 2.0


def test_missing_settings_file(tmp_path):
    """An explicit settings file that does not exist is an error."""
    with pytest.raises(FileNotFoundError):
        CopySettings.from_sources(
            cli_overrides={}, env={}, settings_file=tmp_path / "missing.toml"
        )


def test_unsupported_extension(tmp_path):
    """Only TOML and JSON settings files are understood."""
    path = tmp_path / "settings.yaml"
    path.write_text("interval_seconds: 1")
    with pytest.raises(ValueError, match="Unsupported settings file extension"):
        CopySettings.from_sources(cli_overrides={}, env={}, settings_file=path)


def test_section_must_be_mapping(tmp_path):
    """A scalar command section is rejected."""
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"copy": 3}))
    with pytest.raises(ValueError, match="'copy' section"):
        CopySettings.from_sources(cli_overrides={}, env={}, settings_file=path)


def test_malformed_env_value():
    """Environment values are cast and invalid ones fail loudly."""
    with pytest.raises(ValueError):
        CopySettings.from_sources(
            cli_overrides={},
            env={"BYTERATE_COPY_INTERVAL_SECONDS": "soon"},
            settings_file=None,
        )


@pytest.mark.parametrize(
    "value, expected",
    [("on", True), ("No", False), (1, True), (0.0, False), (True, True)],
)
def test_to_bool(value, expected):
    """Flag-like strings and numbers are coerced to booleans."""
    assert _to_bool(value) is expected


def test_to_bool_rejects_garbage():
    """Unknown strings are not silently treated as false."""
    with pytest.raises(ValueError):
        _to_bool("maybe")
