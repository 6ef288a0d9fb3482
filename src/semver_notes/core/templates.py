"""Template rendering.

Rendering sits behind the small :class:`TemplateRenderer` protocol so the
formatter does not depend on a particular template engine. The default
implementation uses Jinja2 with the templates shipped in this package,
optionally overridden by a user directory.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import jinja2

from semver_notes.exceptions import RenderError, TemplateNotFoundError

logger = logging.getLogger(__name__)

RELEASE_NOTES_TEMPLATE = "releasenotes-md.j2"
CHANGELOG_TEMPLATE = "changelog-md.j2"

DEFAULT_REQUIRED_TEMPLATES = (RELEASE_NOTES_TEMPLATE, CHANGELOG_TEMPLATE)


@runtime_checkable
class TemplateRenderer(Protocol):
    """Anything that can render a named template with a context."""

    def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        """Render ``template_name``.

        Raises:
            RenderError: If rendering fails
        """
        ...


class JinjaTemplateRenderer:
    """Jinja2-backed renderer.

    Templates are looked up in ``template_dir`` first (when given), then
    in the templates bundled with semver-notes. Every template named in
    ``required`` is checked when the renderer is created, so a missing or
    empty template fails at startup instead of at the first render.
    """

    def __init__(
        self,
        template_dir: Path | None = None,
        required: Iterable[str] = DEFAULT_REQUIRED_TEMPLATES,
    ) -> None:
        loaders: list[jinja2.BaseLoader] = []
        if template_dir is not None:
            loaders.append(jinja2.FileSystemLoader(str(template_dir)))
        loaders.append(jinja2.PackageLoader("semver_notes", "templates"))

        self.environment = jinja2.Environment(
            loader=jinja2.ChoiceLoader(loaders),
            undefined=jinja2.StrictUndefined,
            autoescape=False,
        )
        self.check_templates(required)

    def check_templates(self, names: Iterable[str]) -> None:
        """Ensure each named template exists and is not empty.

        Raises:
            TemplateNotFoundError: If a template is missing or empty
        """
        for name in names:
            try:
                source, filename, _ = self.environment.loader.get_source(self.environment, name)
            except jinja2.TemplateNotFound as e:
                raise TemplateNotFoundError(f"Template not found: {name}") from e
            if not source.strip():
                raise TemplateNotFoundError(f"Template is empty: {filename or name}")
            logger.debug("Using template %s from %s", name, filename)

    def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        try:
            template = self.environment.get_template(template_name)
            return template.render(**context)
        except jinja2.TemplateNotFound as e:
            raise RenderError(f"Template not found: {e.name}", template=template_name) from e
        except jinja2.TemplateError as e:
            raise RenderError(
                f"Failed to render {template_name}: {e}", template=template_name
            ) from e
