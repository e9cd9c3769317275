"""Configuration model for the mailkit-emlx converter.

Provides ``EmlxConverterConfig`` with all tunable parameters and sensible
defaults.  Supports loading overrides from YAML or JSON files via the
``from_file()`` classmethod.
"""

from __future__ import annotations

import json
import pathlib

from pydantic import BaseModel, Field


class EmlxConverterConfig(BaseModel):
    """All tunable parameters with sensible defaults."""

    # --- Identity ---
    parser_version: str = "mailkit_emlx:1.0.0"

    # --- Error Policy ---
    error_tolerant: bool = False
    remove_failed_output: bool = True

    # --- Streaming ---
    chunk_size: int = Field(default=64 * 1024, gt=0)

    # --- Attachments ---
    marker_header: str = "X-Apple-Content-Length"
    ignored_entries: list[str] = [".DS_Store"]

    # --- Batch ---
    input_pattern: str = "**/*.emlx"
    output_suffix: str = ".eml"

    @classmethod
    def from_file(cls, path: str) -> EmlxConverterConfig:
        """Load configuration from a YAML or JSON file.

        File format is detected by extension: ``.yaml`` / ``.yml`` for YAML,
        ``.json`` for JSON.  Keys present in the file override the
        corresponding defaults; keys not present retain their defaults.
        """
        file_path = pathlib.Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        suffix = file_path.suffix.lower()

        if suffix in (".yaml", ".yml"):
            try:
                import yaml  # type: ignore[import-untyped]
            except ImportError as exc:
                raise ImportError(
                    "pyyaml is required to load YAML config files. "
                    "Install it with: pip install pyyaml"
                ) from exc
            with open(file_path) as fh:
                data = yaml.safe_load(fh)
        elif suffix == ".json":
            with open(file_path) as fh:
                data = json.load(fh)
        else:
            raise ValueError(
                f"Unsupported config file extension '{suffix}'. "
                "Use .yaml, .yml, or .json."
            )

        if data is None:
            data = {}

        return cls(**data)
