"""Configuration management for gxdocgen."""

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from gxdocgen.constants import DEFAULT_OBJECT_KINDS, DEFAULT_SOURCE_KINDS

CONFIG_FILE_NAME = ".gxdocgen"


@dataclass
class GeneratorConfig:
    """Configuration for extraction and documentation generation.

    Attributes:
        output_dir: Directory where Markdown files are written.
        object_kinds: Mapping of object kind identifiers (GUIDs) to
            human-readable kind names. Objects of unmapped kinds are skipped.
        source_kinds: Kind names whose objects carry source code and
            parameter declarations.
    """
    output_dir: str = "./docs"
    object_kinds: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_OBJECT_KINDS))
    source_kinds: list[str] = field(default_factory=lambda: list(DEFAULT_SOURCE_KINDS))


def load_config(config_path: Path | None = None) -> GeneratorConfig:
    """Load generator configuration from a YAML file.

    Args:
        config_path: Path to the configuration file. If None, uses
            .gxdocgen in the current directory.

    Returns:
        GeneratorConfig object with loaded or default values.

    Notes:
        If the file doesn't exist or can't be parsed, returns default config.
        Extra object kinds are added to the built-in ones. Expected YAML
        structure:

        ```yaml
        generator:
          output_dir: ./docs
          object_kinds:
            1db606f2-af09-4cf9-a3b5-b481519d28f6: Transaction
          source_kinds:
            - Procedure
        ```
    """
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILE_NAME

    if not config_path.exists():
        return GeneratorConfig()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            return GeneratorConfig()

        generator_config = data.get("generator", {})
        if not isinstance(generator_config, dict):
            return GeneratorConfig()

        config = GeneratorConfig()
        config.output_dir = str(generator_config.get("output_dir", config.output_dir))

        extra_kinds = generator_config.get("object_kinds") or {}
        if isinstance(extra_kinds, dict):
            config.object_kinds.update(
                {str(k): str(v) for k, v in extra_kinds.items()}
            )

        source_kinds = generator_config.get("source_kinds")
        if isinstance(source_kinds, list):
            config.source_kinds = [str(kind) for kind in source_kinds]

        return config
    except (yaml.YAMLError, OSError, KeyError, TypeError, ValueError):
        # Return default config on any parsing errors
        return GeneratorConfig()
