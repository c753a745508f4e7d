"""Runtime settings for the command line.

Defaults can be overridden from the environment:
  SNIPGEN_LANGUAGES  comma separated target ids, e.g. "shell,node_fetch"
  SNIPGEN_NORMALIZE  1/true/yes to put URL template braces back
  SNIPGEN_INDENT     indent of the JSON printed by the CLI
"""

from __future__ import annotations

import os
from typing import Mapping

from pydantic import BaseModel

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Snippet generation settings."""

    languages: list[str] = ["javascript"]
    normalize: bool = False
    indent: int = 2

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        environ = os.environ if environ is None else environ
        values: dict = {}

        languages = environ.get("SNIPGEN_LANGUAGES")
        if languages:
            values["languages"] = [lang.strip() for lang in languages.split(",") if lang.strip()]
        if "SNIPGEN_NORMALIZE" in environ:
            values["normalize"] = environ["SNIPGEN_NORMALIZE"].strip().lower() in _TRUE_VALUES
        if environ.get("SNIPGEN_INDENT"):
            values["indent"] = environ["SNIPGEN_INDENT"]  # validated to int by pydantic

        return cls(**values)

    def merged(self, languages: tuple[str, ...] | list[str] = (), normalize: bool | None = None) -> Settings:
        """Copy with command line values applied over these settings."""
        update: dict = {}
        if languages:
            update["languages"] = list(languages)
        if normalize is not None:
            update["normalize"] = normalize
        return self.model_copy(update=update)
