"""Tests for the @examplesWebR tag."""

import logging
import re

import pytest

from roxytags.generators.encoder import decode_webr_code
from roxytags.output.rd import rd_section
from roxytags.parsers.description import PackageConfig
from roxytags.parsers.structure import Tag, WebRTagData
from roxytags.tags import webr as webr_tag
from roxytags.tags.webr import (
    SECTION_TITLE,
    build_webr_section,
    parse_examples_webr,
    render_examples_webr,
)
from roxytags.utils.config import WebRConfig

CODE = "x <- 1:10\nplot(x, x^2)"


def _render(raw: str, package_config=None, settings=None):
    parsed = parse_examples_webr(Tag(name="examplesWebR", raw=raw, file="R/a.R", line=7))
    return render_examples_webr(parsed, package_config, settings)


def _url(section) -> str:
    match = re.search(r"\\url\{([^}]*)\}", section.value["content"])
    assert match is not None
    return match.group(1)


def _shared_files(section) -> list:
    return decode_webr_code(_url(section).split("#code=", 1)[1])


class TestParseExamplesWebR:
    """Tests for the parse hook."""

    def test_splits_params_and_code(self) -> None:
        parsed = parse_examples_webr(Tag(name="examplesWebR", raw=f"embed height=400\n{CODE}"))
        assert parsed.tag == "examples"
        assert parsed.value == CODE
        assert parsed.webr == WebRTagData(param_line="embed height=400", code=CODE)

    def test_blank_separator_dropped(self) -> None:
        parsed = parse_examples_webr(Tag(name="examplesWebR", raw=f"\n\n{CODE}"))
        assert parsed.value == CODE

    def test_invalid_params_not_checked(self) -> None:
        parsed = parse_examples_webr(Tag(name="examplesWebR", raw=f"version=v0.1.0\n{CODE}"))
        assert parsed.webr.param_line == "version=v0.1.0"

    def test_empty_body_has_no_webr_data(self) -> None:
        parsed = parse_examples_webr(Tag(name="examplesWebR", raw="embed\n   \n"))
        assert parsed.webr is None


class TestRenderExamplesWebR:
    """Tests for the render hook."""

    def test_examples_and_webr_sections(self) -> None:
        sections = _render(f"\n{CODE}")
        assert len(sections) == 2
        assert sections[0] == rd_section("examples", CODE)
        assert sections[1].type == "section"
        assert sections[1].value["title"] == SECTION_TITLE

    def test_link_by_default(self) -> None:
        content = _render(f"\n{CODE}")[1].value["content"]
        assert content.startswith(
            '\\ifelse{html}{\\out{\n<p><a href="https://webr.r-wasm.org/latest/#code='
        )
        assert "\\ifelse{latex}{\\url{https://webr.r-wasm.org/latest/#code=" in content
        assert content.endswith(
            "{Interactive webR content not available for this output format.}}"
        )
        assert "<iframe" not in content

    def test_embed(self) -> None:
        content = _render(f"embed height=400\n{CODE}")[1].value["content"]
        assert "<iframe" in content
        assert "--roxytags-webr-height: 400px;" in content

    def test_shared_code(self) -> None:
        files = _shared_files(_render(f"\n{CODE}")[1])
        assert files == [{"name": "example.R", "path": "/example.R", "text": CODE}]

    def test_autorun_flag(self) -> None:
        assert _url(_render(f"autorun\n{CODE}")[1]).endswith("&jua")
        assert _url(_render(f"\n{CODE}")[1]).endswith("&ju")

    def test_version_mode_channel(self) -> None:
        url = _url(_render(f"version=v0.6.0 mode=editor-plot channel=PostMessage\n{CODE}")[1])
        assert url.startswith(
            "https://webr.r-wasm.org/v0.6.0/?mode=editor-plot&channel=PostMessage#code="
        )

    def test_package_defaults_applied(self) -> None:
        config = PackageConfig(
            fields={
                "Config/roxytags/webr-height": "500",
                "Config/roxytags/webr-version": "v0.5.4",
            }
        )
        content = _render(f"embed\n{CODE}", config)[1].value["content"]
        assert "--roxytags-webr-height: 500px;" in content
        assert "https://webr.r-wasm.org/v0.5.4/" in content

    def test_inline_overrides_package(self) -> None:
        config = PackageConfig(fields={"Config/roxytags/webr-height": "500"})
        content = _render(f"embed height=200\n{CODE}", config)[1].value["content"]
        assert "--roxytags-webr-height: 200px;" in content

    def test_empty_inline_values_override_package(self) -> None:
        config = PackageConfig(
            fields={
                "Config/roxytags/webr-mode": "editor-plot",
                "Config/roxytags/webr-channel": "PostMessage",
            }
        )
        url = _url(_render(f"mode= channel=\n{CODE}", config)[1])
        assert url.startswith("https://webr.r-wasm.org/latest/#code=")

    def test_non_ascii_digit_package_height_keeps_section(self, caplog) -> None:
        config = PackageConfig(fields={"Config/roxytags/webr-height": "5\u00b2"})
        with caplog.at_level(logging.WARNING):
            sections = _render(f"embed\n{CODE}", config)
        assert len(sections) == 2
        assert "--roxytags-webr-height: 300px;" in sections[1].value["content"]
        assert "failed to build webR section" not in caplog.text

    def test_settings_layer(self) -> None:
        settings = WebRConfig(service_url="https://webr.example.org", filename="demo.R")
        section = _render(f"\n{CODE}", settings=settings)[1]
        assert _url(section).startswith("https://webr.example.org/latest/#code=")
        assert _shared_files(section)[0]["name"] == "demo.R"

    def test_install_code_with_repository(self) -> None:
        config = PackageConfig(
            fields={"Package": "mypkg", "URL": "https://alice.github.io/mypkg/"}
        )
        text = _shared_files(_render(f"\n{CODE}", config)[1])[0]["text"]
        assert text.startswith(
            '# Install and load the package\n'
            'webr::install("mypkg", repos = "https://alice.github.io/mypkg/")\n'
            "library(mypkg)\n"
        )
        assert text.endswith(f"# Example code\n{CODE}")

    def test_install_code_omitted_without_repository(self, caplog) -> None:
        config = PackageConfig(fields={"Package": "mypkg"})
        with caplog.at_level(logging.WARNING):
            sections = _render(f"\n{CODE}", config)
        assert len(sections) == 2
        assert _shared_files(sections[1])[0]["text"] == CODE
        assert "Omitting webR install code for mypkg" in caplog.text

    def test_empty_body_only_examples(self) -> None:
        assert _render("embed\n") == [rd_section("examples", "")]

    @pytest.mark.parametrize("params", ["version=v0.5.3", "version=0.6.0", "mode=editor-bogus"])
    def test_invalid_parameter_falls_back(self, params: str, caplog) -> None:
        with caplog.at_level(logging.ERROR):
            sections = _render(f"{params}\n{CODE}")
        assert sections == [rd_section("examples", CODE)]
        assert "R/a.R:7" in caplog.text

    def test_non_numeric_height_ignored(self) -> None:
        content = _render(f"embed height=tall\n{CODE}")[1].value["content"]
        assert "--roxytags-webr-height: 300px;" in content

    def test_unexpected_failure_falls_back(self, monkeypatch, caplog) -> None:
        def explode(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(webr_tag, "encode_webr_code", explode)
        with caplog.at_level(logging.WARNING):
            sections = _render(f"\n{CODE}")
        assert sections == [rd_section("examples", CODE)]
        assert "failed to build webR section: boom" in caplog.text


class TestBuildWebrSection:
    """Tests for building the section directly."""

    def test_raises_on_invalid_version(self) -> None:
        from roxytags.parsers.params import InvalidParameterError

        data = WebRTagData(param_line="version=v0.1.0", code=CODE)
        with pytest.raises(InvalidParameterError):
            build_webr_section(data, PackageConfig(), WebRConfig())

    def test_identical_input_identical_output(self) -> None:
        data = WebRTagData(param_line="embed", code=CODE)
        first = build_webr_section(data, PackageConfig(), WebRConfig())
        second = build_webr_section(data, PackageConfig(), WebRConfig())
        assert first == second
