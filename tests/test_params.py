"""Tests for tag-line parameter parsing and validation."""

import pytest

from roxytags.parsers.params import (
    BUILTIN_PARAMS,
    InvalidParameterError,
    merge_params,
    parse_bool,
    parse_params,
    resolve_params,
    validate_mode,
    validate_version,
)
from roxytags.parsers.structure import WebRParams


class TestValidateVersion:
    """Tests for webR version validation."""

    @pytest.mark.parametrize("version", ["latest", "v0.5.4", "v0.6.0", "v1.0.0", "v0.5.10"])
    def test_valid(self, version: str) -> None:
        assert validate_version(version) is True

    @pytest.mark.parametrize(
        "version",
        ["v0.5.3", "v0.3.0", "0.6.0", "invalid", "v0.6", "v0.6.0-rc", "Latest", ""],
    )
    def test_invalid(self, version: str) -> None:
        assert validate_version(version) is False

    def test_extra_components(self) -> None:
        assert validate_version("v0.5.4.1") is True
        assert validate_version("v0.5.3.9") is False


class TestValidateMode:
    """Tests for REPL mode validation."""

    def test_empty_is_valid(self) -> None:
        assert validate_mode("") is True

    def test_known_components(self) -> None:
        assert validate_mode("editor-plot") is True
        assert validate_mode("editor-plot-terminal-files") is True

    def test_unknown_component(self) -> None:
        assert validate_mode("editor-bogus") is False

    def test_empty_component(self) -> None:
        assert validate_mode("editor--plot") is False


class TestParseBool:
    """Tests for case-insensitive flag values."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "Yes", "1", " true "])
    def test_truthy(self, value: str) -> None:
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["false", "no", "0", "", "on"])
    def test_falsy(self, value: str) -> None:
        assert parse_bool(value) is False


class TestParseParams:
    """Tests for reading options from a tag line."""

    def test_empty_line_sets_nothing(self) -> None:
        assert parse_params("") == WebRParams()

    def test_bare_flags(self) -> None:
        params = parse_params("embed autorun")
        assert params.embed is True
        assert params.autorun is True

    def test_explicit_false(self) -> None:
        params = parse_params("embed=false autorun=FALSE")
        assert params.embed is False
        assert params.autorun is False

    def test_flag_requires_whole_token(self) -> None:
        params = parse_params("embedded noautorun")
        assert params.embed is None
        assert params.autorun is None

    def test_height(self) -> None:
        assert parse_params("height=450").height == 450

    def test_non_numeric_height_ignored(self) -> None:
        assert parse_params("height=tall").height is None
        assert parse_params("height=12px").height is None

    def test_version(self) -> None:
        assert parse_params("version=v0.6.0").version == "v0.6.0"

    def test_invalid_version_raises(self) -> None:
        with pytest.raises(InvalidParameterError, match="v0.5.3"):
            parse_params("version=v0.5.3")

    def test_invalid_mode_raises(self) -> None:
        with pytest.raises(InvalidParameterError, match="editor-bogus"):
            parse_params("mode=editor-bogus")

    def test_empty_mode(self) -> None:
        assert parse_params("mode=").mode == ""

    def test_channel(self) -> None:
        assert parse_params("channel=PostMessage").channel == "PostMessage"

    def test_empty_channel(self) -> None:
        assert parse_params("channel=").channel == ""

    def test_channel_unset_when_absent(self) -> None:
        assert parse_params("mode=editor").channel is None

    def test_first_occurrence_wins(self) -> None:
        params = parse_params("height=100 height=200 version=v0.6.0 version=bogus")
        assert params.height == 100
        assert params.version == "v0.6.0"

    def test_first_flag_occurrence_wins(self) -> None:
        assert parse_params("embed=false embed").embed is False


class TestMergeParams:
    """Tests for the three-way default cascade."""

    def test_local_wins(self) -> None:
        merged = merge_params(
            BUILTIN_PARAMS, WebRParams(height=500), WebRParams(height=200)
        )
        assert merged.height == 200

    def test_package_over_builtin(self) -> None:
        merged = merge_params(BUILTIN_PARAMS, WebRParams(height=500), WebRParams())
        assert merged.height == 500

    def test_builtin_fallback(self) -> None:
        merged = merge_params(BUILTIN_PARAMS, WebRParams(), WebRParams())
        assert merged == BUILTIN_PARAMS

    def test_false_is_not_unset(self) -> None:
        merged = merge_params(
            BUILTIN_PARAMS, WebRParams(embed=True), WebRParams(embed=False)
        )
        assert merged.embed is False

    def test_inputs_not_modified(self) -> None:
        package = WebRParams(height=500)
        local = WebRParams(mode="editor")
        merge_params(BUILTIN_PARAMS, package, local)
        assert package == WebRParams(height=500)
        assert local == WebRParams(mode="editor")


class TestResolveParams:
    """Tests for parsing a tag line against defaults."""

    def test_package_default_used_when_absent(self) -> None:
        assert resolve_params("", WebRParams(height=500)).height == 500

    def test_inline_overrides_package(self) -> None:
        assert resolve_params("height=200", WebRParams(height=500)).height == 200

    def test_full_tag_line(self) -> None:
        params = resolve_params(
            "embed=false autorun mode=editor-plot height=250 version=v0.6.0"
        )
        assert params.to_dict() == {
            "embed": False,
            "autorun": True,
            "version": "v0.6.0",
            "height": 250,
            "mode": "editor-plot",
            "channel": "",
        }

    def test_builtin_defaults(self) -> None:
        assert resolve_params("").to_dict() == {
            "embed": False,
            "autorun": False,
            "version": "latest",
            "height": 300,
            "mode": "",
            "channel": "",
        }
