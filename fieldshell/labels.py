"""Label text derivation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from markupsafe import Markup, escape

from .config import ShellConfig
from .utils import humanize
from .widgets import WidgetRenderer

logger = logging.getLogger(__name__)


def label_text(
    field: str,
    override: Any = None,
    *,
    colon: bool = False,
    required: bool = False,
    config: Optional[ShellConfig] = None,
) -> Markup:
    """Return the escaped inner text of a field's label.

    A missing or blank *override* falls back to the humanised field name.
    Caller text is escaped unless it is already ``Markup``; the colon and
    the required marker are appended after escaping so the marker stays
    live markup.
    """
    config = config or ShellConfig()
    if override is None or (isinstance(override, str) and not override.strip()):
        text = escape(humanize(field))
    else:
        text = escape(override)
    if colon:
        text += config.label_suffix
    if required:
        text += Markup(config.required_marker)
    return text


def derive_label(
    renderer: WidgetRenderer,
    field: str,
    override: Any = None,
    label_options: Optional[Mapping[str, Any]] = None,
    config: Optional[ShellConfig] = None,
    **attrs: Any,
) -> Markup:
    """Render the ``<label>`` for *field*.

    Args:
        renderer: Widget renderer of the enclosing object.
        field: Field identifier.
        override: Explicit label text.  ``False`` suppresses the label and
            returns empty markup.
        label_options: ``colon``, ``required`` and ``label_for``.
        config: Shell configuration (required marker, colon text).
        **attrs: Extra HTML attributes for the label tag.  ``for_`` is used
            as the target when ``label_for`` is not given.

    Returns:
        The label markup, ready to embed.
    """
    if override is False:
        return Markup("")
    opts = dict(label_options or {})
    text = label_text(
        field,
        override,
        colon=bool(opts.get("colon", False)),
        required=bool(opts.get("required", False)),
        config=config,
    )
    explicit_for = attrs.pop("for_", None)
    target = opts.get("label_for") or explicit_for or renderer.dom_id(field)
    logger.debug("Label for %r targets %r", field, target)
    return renderer.label(field, text, for_=target, **attrs)
