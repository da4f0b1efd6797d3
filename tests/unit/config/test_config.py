# pyright: reportAny=false
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from gitprompt.config import (
    DEFAULT_CONFIG,
    Config,
    ConfigLoadError,
    ConfigSourceName,
    ConfigValidationError,
    LogLevel,
    get_user_config_path,
    safe_load_config,
)
from gitprompt.enums import ColorMode, Operation

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


def write_user_config(text: str) -> Path:
    path = get_user_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


class TestFromDict:
    def test_empty_gives_defaults(self) -> None:
        config = Config.from_dict({})

        assert config.to_dict()["render"]["separator"] == " "
        assert config.render.hide_clean_counts is True
        assert config.status.short_id_length == 7
        assert config.logging.level is LogLevel.WARNING

    def test_overrides_section(self) -> None:
        config = Config.from_dict({"render": {"color": "zsh", "separator": "|"}})

        assert config.render.color is ColorMode.ZSH
        assert config.render.separator == "|"
        assert config.render.stash_symbol == "≡"

    def test_precedence_list(self) -> None:
        config = Config.from_dict(
            {
                "status": {
                    "operation_precedence": ["merge", "bisect", "rebase", "cherry_pick"]
                }
            }
        )

        assert config.status.operation_precedence[0] is Operation.MERGE

    def test_invalid_value_raises(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            Config.from_dict({"status": {"short_id_length": 2}})

        assert exc_info.value.key == "status.short_id_length"
        assert exc_info.value.value == 2
        assert "status.short_id_length" in str(exc_info.value)

    def test_incomplete_precedence_raises(self) -> None:
        with pytest.raises(ConfigValidationError, match="exactly once"):
            Config.from_dict({"status": {"operation_precedence": ["merge"]}})

    def test_unknown_keys_ignored_by_default(self) -> None:
        config = Config.from_dict({"render": {"sparkle": True}, "extra": 1})

        assert config.to_dict()["render"]["separator"] == " "

    def test_unknown_keys_rejected_in_strict(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            Config.from_dict({"render": {"sparkle": True}}, strict=True)

        assert exc_info.value.key == "render.sparkle"

    def test_skip_validation_still_parses_sections(self) -> None:
        config = Config.from_dict({"render": {"prefix": "["}}, validate=False)

        assert config.render.prefix == "["


class TestSerialization:
    def test_to_dict_includes_defaults(self) -> None:
        assert Config.from_dict({}).to_dict() == DEFAULT_CONFIG

    def test_to_dict_without_defaults(self) -> None:
        config = Config.from_dict({"render": {"colors": {"stash": "red"}}})

        assert config.to_dict(include_defaults=False) == {
            "render": {"colors": {"stash": "red"}}
        }

    def test_to_dict_returns_copy(self) -> None:
        config = Config.from_dict({})

        config.to_dict()["render"]["separator"] = "|"

        assert config.to_dict()["render"]["separator"] == " "

    def test_to_toml(self) -> None:
        config = Config.from_dict({"render": {"separator": "|"}})

        assert config.to_toml() == '[render]\nseparator = "|"\n'


class TestLoad:
    def test_defaults_only(self) -> None:
        config = Config.load()

        assert config.to_dict() == DEFAULT_CONFIG

    def test_user_file(self) -> None:
        write_user_config('[render]\nseparator = ":"\n')

        assert Config.load().render.separator == ":"

    def test_env_beats_user_file(self, monkeypatch: pytest.MonkeyPatch) -> None:
        write_user_config('[render]\nseparator = ":"\n')
        monkeypatch.setenv("GITPROMPT_RENDER__SEPARATOR", "/")

        assert Config.load().render.separator == "/"

    def test_cli_beats_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITPROMPT_RENDER__COLOR", "ansi")

        config = Config.load(
            include_cli=True, cli_overrides={"render": {"color": "zsh"}}
        )

        assert config.render.color is ColorMode.ZSH

    def test_explicit_file_replaces_user_file(self, tmp_path: Path) -> None:
        write_user_config('[render]\nseparator = ":"\nprefix = "<"\n')
        path = tmp_path / "explicit.toml"
        path.write_text('[render]\nseparator = "-"\n')

        config = Config.load(config_path=path)

        assert config.render.separator == "-"
        assert config.render.prefix == ""

    def test_explicit_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Config.load(config_path=tmp_path / "missing.toml")

    def test_records_sources(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITPROMPT_STATUS__MAX_DEPTH", "5")

        sources = Config.load().sources

        assert [s.name for s in sources] == [
            ConfigSourceName.ENV,
            ConfigSourceName.USER,
            ConfigSourceName.DEFAULT,
        ]
        assert sources[0].values == {"status": {"max_depth": 5}}

    def test_merged_validation_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITPROMPT_LOGGING__MAX_BYTES", "0")

        with pytest.raises(ConfigValidationError):
            Config.load()


class TestSafeLoadConfig:
    def test_success(self) -> None:
        config, error = safe_load_config()

        assert error is None
        assert config.to_dict()["render"]["separator"] == " "

    def test_invalid_user_file_falls_back(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        write_user_config('[render]\ncolor = "rainbow"\n')

        config, error = safe_load_config()

        assert error is not None
        assert "render.color" in error
        assert config.render.color is ColorMode.NONE
        assert capsys.readouterr().err.startswith("Warning: ")

    def test_unparseable_user_file_falls_back(self) -> None:
        write_user_config("[render\n")

        config, error = safe_load_config()

        assert error is not None
        assert config.to_dict() == DEFAULT_CONFIG

    def test_cli_overrides_applied(self) -> None:
        config, error = safe_load_config(cli_overrides={"render": {"color": "ansi"}})

        assert error is None
        assert config.render.color is ColorMode.ANSI

    def test_missing_explicit_file_always_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError, match="not found"):
            safe_load_config(config_path=tmp_path / "missing.toml")

    def test_strict_mode_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITPROMPT_STRICT_CONFIG", "1")
        write_user_config('[render]\ncolor = "rainbow"\n')

        with pytest.raises(ConfigValidationError):
            safe_load_config()

    def test_strict_mode_rejects_unknown_keys(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GITPROMPT_STRICT_CONFIG", "1")
        write_user_config("[render]\nsparkle = true\n")

        with pytest.raises(ConfigValidationError):
            safe_load_config()

    def test_strict_mode_wraps_os_errors(
        self, monkeypatch: pytest.MonkeyPatch, mocker: MockerFixture
    ) -> None:
        monkeypatch.setenv("GITPROMPT_STRICT_CONFIG", "1")
        mocker.patch.object(Config, "load", side_effect=PermissionError("denied"))

        with pytest.raises(ConfigLoadError, match="denied"):
            safe_load_config()
