"""Template rendering utilities for the preflight report views."""

from __future__ import annotations

import os

from jinja2 import Environment, FileSystemLoader


def _get_template_directories() -> list[str]:
    """Resolve template search paths.

    Templates ship inside the package, both in a source checkout and in an
    installed site-packages layout.
    """

    # Base dir is .../ui_spec_preflight/file_io
    base_dir = os.path.dirname(os.path.abspath(__file__))
    template_dir = os.path.abspath(os.path.join(base_dir, "../templates"))

    if os.path.exists(template_dir):
        return [template_dir]
    return []


def location_filter(entry) -> str:
    """Jinja2 filter rendering ``file`` or ``file:line`` for an issue entry."""

    line = entry.get("line")
    if line is None:
        return entry["file"]
    return f"{entry['file']}:{line}"


class TemplateRenderer:
    """Unified template rendering utility."""

    def __init__(self, template_dir: str | list[str] | None = None):
        if template_dir is None:
            template_dirs = _get_template_directories()
        elif isinstance(template_dir, str):
            template_dirs = [template_dir]
        else:
            template_dirs = list(template_dir)

        self.template_dirs = template_dirs
        self.env = Environment(
            loader=FileSystemLoader(self.template_dirs),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            newline_sequence="\n",
            autoescape=False,
        )
        self.env.filters["location"] = location_filter

    def render_template(self, template_name: str, **kwargs) -> str:
        template = self.env.get_template(template_name)
        return template.render(**kwargs)
