"""Jinja2 template registry keyed by logical role.

Templates are inline strings rendered without auto-escaping: the output is
source code, not HTML. Every template sees the project ``config`` plus a small
function namespace (``hasFeature``, ``toTitle``, ``toLower``, ``toUpper``,
``replace``).
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from jinja2 import DictLoader, Environment, StrictUndefined, Template, TemplateError, TemplateNotFound

from initializr.core.errors import TemplateMissing
from initializr.generators.utils import to_title
from initializr.schemas.project import ProjectConfig

log = logging.getLogger(__name__)


class _Missing:
    """Sentinel returned when a role has no template."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def _replace(value: str, old: str, new: str) -> str:
    return str(value).replace(old, new)


def _pad(value: str, width: int) -> str:
    """Left-justify ``value`` to ``width`` columns, the way gofmt aligns fields."""
    return str(value).ljust(width)


FUNCTIONS = {
    "toTitle": to_title,
    "toLower": lambda value: str(value).lower(),
    "toUpper": lambda value: str(value).upper(),
    "replace": _replace,
    "pad": _pad,
}


def template_key(role: str, variant: Optional[str] = None) -> str:
    return f"{role}/{variant}" if variant else role


class TemplateRegistry:
    """Read-only mapping of role keys to compiled templates."""

    def __init__(self, sources: Mapping[str, str]):
        self.sources = dict(sources)
        self.env = Environment(
            loader=DictLoader(self.sources),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.globals.update(FUNCTIONS)
        self.env.filters.update(FUNCTIONS)

    @classmethod
    def default(cls) -> "TemplateRegistry":
        from initializr.generators.backend_gen.templates import TEMPLATES
        return cls(TEMPLATES)

    def has(self, role: str, variant: Optional[str] = None) -> bool:
        return template_key(role, variant) in self.sources

    def get(self, role: str, variant: Optional[str] = None) -> Union[Template, _Missing]:
        key = template_key(role, variant)
        try:
            return self.env.get_template(key)
        except TemplateNotFound:
            return MISSING
        except TemplateError as e:
            raise TemplateMissing(key, str(e)) from e

    def resolve(self, role: str, variant: Optional[str] = None, fallback: Optional[str] = None) -> Union[Template, _Missing]:
        """Look up ``role/variant`` and fall back to ``role/fallback``."""
        template = self.get(role, variant)
        if template is MISSING and fallback and fallback != variant:
            log.info("No %s template for %s, falling back to %s", role, variant, fallback)
            template = self.get(role, fallback)
        return template

    def render(self, template: Union[Template, _Missing], config: ProjectConfig, role: str = "", **context: Any) -> str:
        if template is MISSING:
            raise TemplateMissing(role or "unknown")
        try:
            return template.render(config=config, hasFeature=config.has_feature, **context)
        except TemplateError as e:
            raise TemplateMissing(template.name or role, str(e)) from e
