"""Tests for page generation."""

import pathlib

import pytest

from manual_pages.config import BuildConfig
from manual_pages.entries import build_entries
from manual_pages.generator import (
    CONTENT_MARKER,
    DEFAULT_TEMPLATE_PATH,
    SIDEBAR_CLOSE,
    SIDEBAR_OPEN,
    PageGenerator,
    render_markdown,
)

from conftest import MARKDOWN, TEMPLATE, expected_page


@pytest.fixture
def entry(project, config):
    (entry,) = build_entries([project / "path" / "to" / "manual" / "file.js"], config)
    return entry


def test_render_markdown():
    assert render_markdown(MARKDOWN) == "<h2>Markdown header</h2>"


def test_generate_full_page(config, entry):
    generator = PageGenerator(config)

    assert generator.generate(entry) == expected_page("/path/to/manual/file.js")


def test_generate_with_translations(config, entry):
    config.language = "en"
    config.additional_languages = ["pl", "ar"]
    generator = PageGenerator(config)

    html = generator.generate(entry)

    assert html == expected_page("/path/to/manual/file.js", translations=["en", "pl", "ar"])
    assert html.index("/translations/en.js") < html.index("/translations/pl.js")
    assert html.index("/translations/pl.js") < html.index("/translations/ar.js")
    assert html.index("/translations/ar.js") < html.index("/path/to/manual/file.js")


def test_additional_languages_need_a_primary_language(config, entry):
    config.additional_languages = ["pl"]

    assert "/translations/" not in PageGenerator(config).generate(entry)


def test_missing_siblings_leave_sections_empty(project, config):
    manual = project / "path" / "to" / "manual"
    (manual / "bare.js").write_text("")
    (entry,) = build_entries([manual / "bare.js"], config)

    html = PageGenerator(config).generate(entry)

    assert html == expected_page("/path/to/manual/bare.js", body="", sidebar="")
    assert SIDEBAR_OPEN + SIDEBAR_CLOSE in html


def test_renderer_receives_raw_markdown(config, entry):
    seen = []

    def renderer(text):
        seen.append(text)
        return "<p>rendered</p>"

    html = PageGenerator(config, renderer=renderer).generate(entry)

    assert seen == [MARKDOWN]
    assert SIDEBAR_OPEN + "<p>rendered</p>" + SIDEBAR_CLOSE in html


def test_render_failure_propagates(config, entry):
    def renderer(text):
        raise RuntimeError("bad markdown")

    with pytest.raises(RuntimeError, match="bad markdown"):
        PageGenerator(config, renderer=renderer).write(entry)


def test_template_marker_splits_header_and_trailer(config, entry):
    template = f"<html><head></head>\n{CONTENT_MARKER}\n</html>"

    html = PageGenerator(config, template=template).generate(entry)

    assert html.startswith("<html><head></head>\n\n" + SIDEBAR_OPEN)
    assert html.endswith("</body>\n</html>")
    assert CONTENT_MARKER not in html


def test_default_template_has_marker():
    assert CONTENT_MARKER in DEFAULT_TEMPLATE_PATH.read_text(encoding="utf-8")


def test_template_is_read_once(config, entry, template_file):
    generator = PageGenerator(config)
    template_file.write_text("<div>changed</div>")

    assert generator.generate(entry).startswith(TEMPLATE)


def test_write_creates_output_and_reports(config, entry, reporter):
    output = PageGenerator(config, reporter=reporter).write(entry)

    assert output == config.build_dir / "path" / "to" / "manual" / "file.html"
    assert output.read_text(encoding="utf-8") == expected_page("/path/to/manual/file.js")
    assert reporter.kinds == ["processing", "finished"]
    assert reporter.calls[0][1] == entry.script_path.as_posix()
    assert reporter.calls[1][1] == output.as_posix()


def test_write_silent(config, entry, reporter):
    config.silent = True

    PageGenerator(config, reporter=reporter).write(entry)

    assert reporter.calls == []


def test_write_is_idempotent(config, entry):
    generator = PageGenerator(config)
    first = generator.write(entry).read_bytes()
    second = generator.write(entry).read_bytes()

    assert first == second


def test_custom_template_path(tmp_path, project):
    template = tmp_path / "custom.html"
    template.write_text("<main>custom</main>")
    config = BuildConfig(
        build_dir=tmp_path / "out",
        patterns=["*.js"],
        root=project,
        template_path=template,
    )
    (entry,) = build_entries([project / "path" / "to" / "manual" / "file.js"], config)

    assert PageGenerator(config).generate(entry).startswith("<main>custom</main>\n")


def test_output_path_type(config, entry):
    assert isinstance(PageGenerator(config).write(entry), pathlib.Path)
