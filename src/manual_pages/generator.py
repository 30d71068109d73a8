"""Compose standalone HTML pages for manual test entries."""

import pathlib
from typing import Callable, List, Optional

import markdown

from .config import BuildConfig
from .entries import Entry
from .logging import NullReporter
from .paths import script_src, to_fs_path

DEFAULT_TEMPLATE_PATH = pathlib.Path(__file__).parent / "template.html"
CONTENT_MARKER = "<!-- manual-test-content -->"

SIDEBAR_OPEN = (
    '<div class="manual-test-sidebar">'
    '<a href="/" class="manual-test-sidebar__root-link">&larr; Back to the list</a>'
)
SIDEBAR_CLOSE = "</div>"

TOGGLE_BUTTON = (
    '<button class="manual-test-sidebar__toggle" type="button" title="Toggle sidebar">'
    "<span></span><span></span><span></span>"
    "</button>"
)

BODY_OPEN = '<body class="manual-test-container manual-test-container_no-transitions">'
BODY_CLOSE = "</body>"

SUPPORT_SCRIPTS = [
    "/assets/togglesidebar.js",
    "/assets/inspector.js",
    "/assets/attachinspector.js",
]

Renderer = Callable[[str], str]


def render_markdown(text: str) -> str:
    """Render markdown to an HTML fragment with Python-Markdown."""
    md = markdown.Markdown(extensions=["fenced_code", "tables"])
    return md.convert(text)


def script_tag(src: str) -> str:
    return f'<script src="{src}"></script>'


def translation_src(language: str) -> str:
    return f"/translations/{language}.js"


class PageGenerator:
    """Build and write the page for one entry.

    The template is read once per generator and reused for every page.
    """

    def __init__(
        self,
        config: BuildConfig,
        reporter=None,
        renderer: Optional[Renderer] = None,
        template: Optional[str] = None,
    ):
        self.config = config
        self.reporter = reporter or NullReporter()
        self.renderer = renderer or render_markdown
        if template is None:
            template_path = config.template_path or DEFAULT_TEMPLATE_PATH
            template = template_path.read_text(encoding="utf-8")
        self.template = template

    def render_sidebar(self, entry: Entry) -> str:
        content = ""
        if entry.markdown_path is not None:
            text = to_fs_path(entry.markdown_path).read_text(encoding="utf-8")
            content = self.renderer(text)
        return SIDEBAR_OPEN + content + SIDEBAR_CLOSE

    def render_body(self, entry: Entry) -> str:
        if entry.markup_path is None:
            return ""
        return to_fs_path(entry.markup_path).read_text(encoding="utf-8")

    def script_sources(self, entry: Entry) -> List[str]:
        """Script URLs for the closing block, in load order."""
        sources = list(SUPPORT_SCRIPTS)
        sources.extend(translation_src(lang) for lang in self.config.languages)
        sources.append(script_src(entry.script_path, self.config.root))
        return sources

    def render_closing(self, entry: Entry) -> str:
        scripts = "".join(script_tag(src) for src in self.script_sources(entry))
        return BODY_OPEN + scripts + BODY_CLOSE

    def generate(self, entry: Entry) -> str:
        """Return the full page for ``entry``."""
        header, marker, trailer = self.template.partition(CONTENT_MARKER)
        if not marker:
            header, trailer = self.template, ""

        parts = [
            header,
            self.render_sidebar(entry),
            TOGGLE_BUTTON,
            self.render_body(entry),
            self.render_closing(entry),
        ]
        return "\n".join(parts) + trailer

    def write(self, entry: Entry) -> pathlib.Path:
        """Generate the page for ``entry`` and write it to its output path."""
        if not self.config.silent:
            self.reporter.report("processing", entry.script_path)

        html = self.generate(entry)
        output_path = to_fs_path(entry.output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8", newline="")

        if not self.config.silent:
            self.reporter.report("finished", output_path)
        return output_path
