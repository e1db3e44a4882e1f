"""Shared helpers for field shell rendering.

String helpers for humanising field names and deriving DOM identifiers,
choice-list normalisation, and Rich-based logging setup.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

LOGGER_NAME = "fieldshell"

# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def humanize(name: str) -> str:
    """Turn a field identifier into label text.

    Separators (underscores, hyphens, runs of whitespace) become single
    spaces and the first character is upper-cased.  The rest of the text is
    left as-is.

    Examples::

        humanize("first_name") -> "First name"
        humanize("zipCode") -> "ZipCode"
    """
    text = re.sub(r"[_\-\s]+", " ", str(name)).strip()
    if not text:
        return ""
    return text[0].upper() + text[1:]


def sanitize_dom_id(value: str) -> str:
    """Convert an object/field name into a string usable as an HTML id.

    ``"car[engine]"`` becomes ``"car_engine"``; anything outside
    ``[-a-zA-Z0-9:.]`` is replaced with an underscore and a trailing
    underscore is dropped.
    """
    result = re.sub(r"\]\[|[^-a-zA-Z0-9:.]", "_", str(value))
    return re.sub(r"_$", "", result)


def sanitize_value(value: Any) -> str:
    """Convert a choice value into an id suffix (``"Big Red"`` -> ``"big_red"``)."""
    result = re.sub(r"\s", "_", str(value))
    return re.sub(r"[^-\w]", "", result).lower()


def normalize_choices(choices: Iterable[Any] | Mapping[Any, Any]) -> list[tuple[str, str]]:
    """Return choices as a list of ``(text, value)`` string pairs.

    Accepts ``[("Sports", 1), ...]`` pairs, bare values (used for both text
    and value), or a mapping of ``{text: value}``.
    """
    if isinstance(choices, Mapping):
        items: Iterable[Any] = choices.items()
    else:
        items = choices

    normalized: list[tuple[str, str]] = []
    for choice in items:
        if isinstance(choice, (list, tuple)) and len(choice) == 2:
            text, value = choice
        else:
            text = value = choice
        normalized.append((str(text), str(value)))
    return normalized


def string_values(value: Any) -> set[str]:
    """Return the set of stringified selected values for *value*.

    ``None`` yields an empty set, scalars a single-item set and iterables
    (other than strings) one item per element.
    """
    if value is None:
        return set()
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        return {str(value)}
    return {str(v) for v in value}


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Attach a Rich console handler to the ``fieldshell`` logger.

    Calling it again only updates the level; a second handler is never
    added.  The root logger is left untouched.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    return logger
