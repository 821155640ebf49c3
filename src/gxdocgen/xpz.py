"""Reading of GeneXus export packages (.xpz).

An export package is a zip archive holding one or more export XML documents.
Every document lists the exported objects under Objects/Object and names
the knowledge base in Source/Version.
"""

import logging
import zipfile
from pathlib import Path

from gxdocgen.assembler import parse_export_document
from gxdocgen.config import GeneratorConfig
from gxdocgen.errors import ExportParseError, XpzError
from gxdocgen.models import ExtractResult

logger = logging.getLogger(__name__)

XPZ_EXTENSION = ".xpz"


def validate_input(path: Path) -> None:
    """Check that path points to an existing .xpz file.

    Raises:
        ValueError: If the file is missing, is a directory or has another
            extension
    """
    if not path.exists():
        raise ValueError(f"file does not exist: {path}")

    if path.is_dir():
        raise ValueError(f"expected a file, got a directory: {path}")

    if path.suffix.lower() != XPZ_EXTENSION:
        raise ValueError(f"expected .xpz file, got: {path.suffix or '(no extension)'}")


def extract(path: Path, config: GeneratorConfig | None = None) -> ExtractResult:
    """Extract and resolve all objects of an export package.

    XML members are processed in archive order. A member that cannot be
    decoded is skipped with a warning; the others are still processed.

    Args:
        path: Path to the .xpz file
        config: Generator configuration (defaults if None)

    Returns:
        ExtractResult with the resolved objects and knowledge base name

    Raises:
        FileNotFoundError: If the file doesn't exist
        XpzError: If the file is not a readable zip archive
    """
    if not path.exists():
        raise FileNotFoundError(f"XPZ file not found: {path}")

    if config is None:
        config = GeneratorConfig()

    logger.info(f"Opening XPZ file: {path}")
    result = ExtractResult(objects=[])

    try:
        with zipfile.ZipFile(path) as archive:
            for member in archive.infolist():
                if member.is_dir() or not member.filename.lower().endswith(".xml"):
                    continue

                try:
                    objects, kb_name = parse_export_document(
                        archive.read(member),
                        source_name=member.filename,
                        object_kinds=config.object_kinds,
                        source_kinds=config.source_kinds,
                    )
                except ExportParseError as e:
                    logger.warning(str(e))
                    result.warnings.append(str(e))
                    continue

                if not result.kb_name and kb_name:
                    result.kb_name = kb_name

                if objects:
                    result.objects.extend(objects)
                    logger.info(f"Found {len(objects)} objects in {member.filename}")
    except zipfile.BadZipFile as e:
        raise XpzError(f"failed to open XPZ archive: {e}") from e

    logger.info(f"Extracted {len(result.objects)} GeneXus objects")
    return result
