"""Shared fixtures for manual-pages tests."""

import pathlib

import pytest

from manual_pages.config import BuildConfig
from manual_pages.generator import (
    BODY_CLOSE,
    BODY_OPEN,
    SIDEBAR_CLOSE,
    SIDEBAR_OPEN,
    TOGGLE_BUTTON,
)

TEMPLATE = "<div>template html content</div>"
MARKDOWN = "## Markdown header"
MARKUP = "<div>html file content</div>"


class RecordingReporter:
    """Collects (kind, path) pairs instead of printing."""

    def __init__(self):
        self.calls = []

    def report(self, kind, path):
        self.calls.append((kind, pathlib.Path(path).as_posix()))

    @property
    def kinds(self):
        return [kind for kind, _ in self.calls]


def expected_page(script_src, translations=(), body=MARKUP, sidebar="<h2>Markdown header</h2>"):
    scripts = [
        "/assets/togglesidebar.js",
        "/assets/inspector.js",
        "/assets/attachinspector.js",
        *(f"/translations/{lang}.js" for lang in translations),
        script_src,
    ]
    closing = BODY_OPEN + "".join(f'<script src="{s}"></script>' for s in scripts) + BODY_CLOSE
    return "\n".join(
        [
            TEMPLATE,
            SIDEBAR_OPEN + sidebar + SIDEBAR_CLOSE,
            TOGGLE_BUTTON,
            body,
            closing,
        ]
    )


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def template_file(tmp_path):
    path = tmp_path / "template.html"
    path.write_text(TEMPLATE, encoding="utf-8")
    return path


@pytest.fixture
def project(tmp_path):
    """A scan root with one manual test and its siblings."""
    root = tmp_path / "project"
    manual = root / "path" / "to" / "manual"
    manual.mkdir(parents=True)
    (manual / "file.js").write_text("console.log('manual');")
    (manual / "file.md").write_text(MARKDOWN)
    (manual / "file.html").write_text(MARKUP)
    (manual / "static-file.png").write_bytes(b"\x89PNG fake")
    return root


@pytest.fixture
def config(tmp_path, project, template_file):
    return BuildConfig(
        build_dir=tmp_path / "buildDir",
        patterns=["path/to/manual/*.js"],
        root=project,
        template_path=template_file,
    )
