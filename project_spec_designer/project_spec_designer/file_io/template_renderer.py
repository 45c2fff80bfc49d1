"""Jinja2 rendering of checker reports."""

from __future__ import annotations

import os

from jinja2 import Environment, FileSystemLoader

# Templates bundled in-package (``project_spec_designer/template``)
TEMPLATE_DIR = os.path.abspath(os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "template"))


def _create_environment(template_dirs: list[str]) -> Environment:
    env = Environment(
        loader=FileSystemLoader(template_dirs),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        newline_sequence="\n",
        autoescape=False,
    )
    return env


class TemplateRenderer:
    """Renders report templates, by default from the bundled template directory."""

    def __init__(self, template_dir: str | list[str] | None = None):
        if template_dir is None:
            template_dirs = [TEMPLATE_DIR]
        elif isinstance(template_dir, str):
            template_dirs = [template_dir]
        else:
            template_dirs = list(template_dir)

        self.template_dirs = template_dirs
        self.env = _create_environment(template_dirs)

    def render_template(self, template_name: str, **kwargs) -> str:
        return self.env.get_template(template_name).render(**kwargs)
