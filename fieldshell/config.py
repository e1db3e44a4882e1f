"""Field shell configuration.

Typed, validated settings shared by every builder.  All settings use a
Pydantic v2 model so they can be validated at construction time and
serialised to/from JSON or environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

_TRUE_STRINGS = {"1", "true", "yes", "on"}


class ShellConfig(BaseModel):
    """Settings that shape generated shell markup.

    Instances are immutable; create a new one with ``model_copy(update=...)``
    to change a setting for a single builder.
    """

    model_config = {"frozen": True}

    required_marker: str = Field(
        default='<span class="required">*</span>',
        description="Markup appended to the label of required fields",
    )
    required_attribute: bool = Field(
        default=True,
        description="Whether required fields also get the HTML5 required attribute",
    )
    label_suffix: str = Field(default=":", description="Text appended when colon=True")
    start_year: int = Field(
        default=1801, ge=1, description="First year offered by date and year selects"
    )
    template_dir: Optional[Path] = Field(
        default=None,
        description="Directory searched before the bundled templates",
    )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ShellConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ShellConfig":
        """Build a ``ShellConfig`` from environment variables.

        Recognised variables (all optional):
            FIELDSHELL_REQUIRED_MARKER, FIELDSHELL_REQUIRED_ATTRIBUTE,
            FIELDSHELL_LABEL_SUFFIX, FIELDSHELL_START_YEAR,
            FIELDSHELL_TEMPLATE_DIR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("FIELDSHELL_REQUIRED_MARKER"):
            kwargs["required_marker"] = os.environ["FIELDSHELL_REQUIRED_MARKER"]
        if os.environ.get("FIELDSHELL_REQUIRED_ATTRIBUTE"):
            kwargs["required_attribute"] = (
                os.environ["FIELDSHELL_REQUIRED_ATTRIBUTE"].strip().lower() in _TRUE_STRINGS
            )
        if "FIELDSHELL_LABEL_SUFFIX" in os.environ:
            kwargs["label_suffix"] = os.environ["FIELDSHELL_LABEL_SUFFIX"]
        if os.environ.get("FIELDSHELL_START_YEAR"):
            kwargs["start_year"] = int(os.environ["FIELDSHELL_START_YEAR"])
        if os.environ.get("FIELDSHELL_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["FIELDSHELL_TEMPLATE_DIR"])
        return cls(**kwargs)
