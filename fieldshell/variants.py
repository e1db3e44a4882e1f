"""Presentation variants and Jinja2 template rendering.

A variant maps each field kind to the wrapper template used for it.  Kinds a
variant does not list fall back to ``DEFAULT_TEMPLATES`` (the Standard
variant's markup), so a new variant only names the templates that differ::

    COMPACT = STANDARD.extend("compact", {FieldKind.PLAIN: "compact/plain.html.j2"})

A template is either the path of a ``.j2`` file (relative to the template
directories) or a callable taking the shell context and returning markup.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape
from markupsafe import Markup

from .kinds import FieldKind, UnknownFieldKindError, UnknownVariantError, coerce_kind

logger = logging.getLogger(__name__)

TemplateRef = Union[str, Callable[[dict[str, Any]], Any]]

# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the wrapper templates for field shells.

    Templates are looked up in *template_dir* first (when given) and then in
    the bundled ``fieldshell/templates/`` directory, so a deployment can
    override any single ``<variant>/<kind>.html.j2`` file.  Autoescaping is
    on: values that are not ``Markup`` are escaped.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        search_path = [str(_DEFAULT_TEMPLATE_DIR)]
        if template_dir is not None:
            search_path.insert(0, str(template_dir))
        self.search_path = search_path
        self.env = Environment(
            loader=FileSystemLoader(search_path),
            autoescape=select_autoescape(["html", "j2"], default_for_string=True, default=True),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_path: str, context: Mapping[str, Any]) -> Markup:
        """Render a single template file with *context*."""
        template = self.env.get_template(template_path)
        return Markup(template.render(**context))


@lru_cache(maxsize=8)
def get_renderer(template_dir: Optional[Path] = None) -> TemplateRenderer:
    """Return a shared ``TemplateRenderer`` for *template_dir*."""
    return TemplateRenderer(template_dir)


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------

DEFAULT_TEMPLATES: Mapping[FieldKind, str] = MappingProxyType({
    FieldKind.PLAIN: "standard/plain.html.j2",
    FieldKind.CHECKBOX: "standard/checkbox.html.j2",
    FieldKind.SUBMIT_BUTTON: "standard/submit_button.html.j2",
    FieldKind.RADIO_CHOICE: "standard/radio_choice.html.j2",
    FieldKind.RADIO_GROUP: "standard/radio_group.html.j2",
    FieldKind.MULTI_CHOICE: "standard/multi_choice.html.j2",
})


@dataclass(frozen=True)
class Variant:
    """A named mapping from field kind to wrapper template."""

    name: str
    templates: Mapping[FieldKind, TemplateRef] = field(default_factory=dict)

    def __post_init__(self) -> None:
        coerced = {coerce_kind(kind, self.name): ref for kind, ref in self.templates.items()}
        object.__setattr__(self, "templates", MappingProxyType(coerced))

    def template_for(self, kind: FieldKind | str) -> TemplateRef:
        """Return the template for *kind*, falling back to the defaults.

        Raises:
            UnknownFieldKindError: If neither this variant nor the defaults
                define a template for *kind*.
        """
        kind = coerce_kind(kind, self.name)
        if kind in self.templates:
            return self.templates[kind]
        try:
            ref = DEFAULT_TEMPLATES[kind]
        except KeyError:
            raise UnknownFieldKindError(
                f"No {kind.value!r} template in variant {self.name!r}",
                kind=kind.value,
                variant=self.name,
            ) from None
        logger.debug("Variant %s has no %s template, using %s", self.name, kind.value, ref)
        return ref

    def render(
        self,
        kind: FieldKind | str,
        context: Mapping[str, Any],
        renderer: Optional[TemplateRenderer] = None,
    ) -> Markup:
        """Render the wrapper markup for *kind* with *context*."""
        kind = coerce_kind(kind, self.name)
        ref = self.template_for(kind)
        if callable(ref):
            return Markup(ref(dict(context)))
        renderer = renderer or get_renderer()
        try:
            return renderer.render(ref, context)
        except TemplateNotFound as exc:
            raise UnknownFieldKindError(
                f"Template {ref!r} for {kind.value!r} in variant {self.name!r} not found",
                kind=kind.value,
                variant=self.name,
            ) from exc

    def extend(self, name: str, templates: Mapping[FieldKind | str, TemplateRef]) -> "Variant":
        """Return a new variant overriding some of this variant's templates."""
        return Variant(name, {**self.templates, **templates})


STANDARD = Variant("standard")

TABLE = Variant("table", {
    FieldKind.PLAIN: "table/plain.html.j2",
    FieldKind.CHECKBOX: "table/plain.html.j2",
    FieldKind.SUBMIT_BUTTON: "table/submit_button.html.j2",
})

SIMPLE = Variant("simple", {
    FieldKind.PLAIN: "simple/plain.html.j2",
    FieldKind.CHECKBOX: "simple/checkbox.html.j2",
    FieldKind.SUBMIT_BUTTON: "simple/submit_button.html.j2",
})

VARIANTS: Mapping[str, Variant] = MappingProxyType({
    v.name: v for v in (STANDARD, TABLE, SIMPLE)
})


def get_variant(variant: Variant | str) -> Variant:
    """Return *variant* itself, or the built-in variant with that name."""
    if isinstance(variant, Variant):
        return variant
    try:
        return VARIANTS[variant]
    except KeyError:
        raise UnknownVariantError(
            f"Unknown presentation variant {variant!r}", variant=str(variant)
        ) from None
