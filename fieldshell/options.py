"""Splitting caller options into label, field and pass-through views."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

# Options consumed by the shell itself.  None of these may reach the widget
# renderer, where they would turn into bogus HTML attributes.
FIELD_OPTION_KEYS: frozenset[str] = frozenset({"label", "required", "description", "decoration"})
LABEL_OPTION_KEYS: frozenset[str] = frozenset({"required", "colon", "label_for"})
PRESENTATION_KEYS: frozenset[str] = FIELD_OPTION_KEYS | LABEL_OPTION_KEYS


@dataclass(frozen=True)
class PartitionedOptions:
    """Three disjoint-purpose views over one call's options.

    ``required`` shows up in both ``label_options`` and ``field_options``
    because it drives the label marker as well as the element's
    ``required`` attribute.
    """

    label_options: dict[str, Any] = field(default_factory=dict)
    field_options: dict[str, Any] = field(default_factory=dict)
    passthrough: dict[str, Any] = field(default_factory=dict)

    @property
    def required(self) -> bool:
        return bool(self.field_options.get("required"))


def partition_options(options: Mapping[str, Any] | None) -> PartitionedOptions:
    """Split *options* without touching the caller's mapping.

    Every presentation value is read from the caller's mapping before
    anything is stripped, so the ``label`` override survives into the label
    text.  Unknown keys pass through untouched.
    """
    source = dict(options or {})
    return PartitionedOptions(
        label_options={k: v for k, v in source.items() if k in LABEL_OPTION_KEYS},
        field_options={k: v for k, v in source.items() if k in FIELD_OPTION_KEYS},
        passthrough={k: v for k, v in source.items() if k not in PRESENTATION_KEYS},
    )
