"""Assembly of resolved objects from a GeneXus export document.

For every exported object this module resolves the parameter signature,
parses the annotation comment, and merges both into one DocComment. When a
procedure has no annotation comment, documentation is synthesized from
metadata so its parameters are still documented.
"""

import logging
import xml.etree.ElementTree as ET
from collections.abc import Collection, Mapping

from gxdocgen.constants import (
    DEFAULT_OBJECT_KINDS,
    DEFAULT_SOURCE_KINDS,
    GX_PART_SOURCE_CODE,
    KIND_FOLDER,
)
from gxdocgen.errors import ExportParseError
from gxdocgen.models import DocComment, ParameterDoc, ResolvedObject
from gxdocgen.parsers import get_parser_for_kind
from gxdocgen.signature import enrich_with_variable_metadata, extract_procedure_signature
from gxdocgen.xml_query import attr, find_all, part_path, text

logger = logging.getLogger(__name__)


def merge_documentation(
    doc: DocComment | None,
    object_node: ET.Element,
    parameters: list[ParameterDoc]
) -> DocComment | None:
    """Merge resolved parameters into parsed documentation.

    - No documentation and no parameters: stays None
    - No documentation: an auto-generated DocComment carrying the parameters
    - Documentation without @param tags: parameters are grafted onto it
    - Documentation with @param tags: kept as written

    Args:
        doc: DocComment parsed from the annotation block, or None
        object_node: The object's XML element, used for enrichment
        parameters: Parameters from the resolved signature

    Returns:
        Merged DocComment, or None
    """
    if not parameters:
        return doc

    if doc is None:
        return DocComment(
            parameters=enrich_with_variable_metadata(parameters, object_node),
            is_auto_generated=True,
        )

    if not doc.parameters:
        doc.parameters = enrich_with_variable_metadata(parameters, object_node)

    return doc


def resolve_object(
    object_node: ET.Element,
    kind: str,
    source_kinds: Collection[str] = DEFAULT_SOURCE_KINDS
) -> ResolvedObject:
    """Resolve one exported object into its documentation record.

    Args:
        object_node: Object element from the export document
        kind: Human-readable kind of the object
        source_kinds: Kinds whose objects carry source code

    Returns:
        ResolvedObject with signature and documentation for source kinds
    """
    name = attr(object_node, "name") or ""
    description = attr(object_node, "description") or ""

    resolved = ResolvedObject(
        name=description or name,
        kind=kind,
        path=name,
        xml_description=description,
    )

    parser = get_parser_for_kind(kind, source_kinds)
    if parser is None:
        return resolved

    resolved.source_code = text(object_node, part_path(GX_PART_SOURCE_CODE) + "/Source")
    resolved.signature = extract_procedure_signature(object_node, name)

    doc = None
    if resolved.source_code:
        try:
            doc = parser.parse(resolved.source_code)
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Failed to parse documentation for {name}: {e}")

    resolved.documentation = merge_documentation(doc, object_node, resolved.signature.parameters)
    return resolved


def assemble_objects(
    export_root: ET.Element,
    object_kinds: Mapping[str, str] = DEFAULT_OBJECT_KINDS,
    source_kinds: Collection[str] = DEFAULT_SOURCE_KINDS
) -> list[ResolvedObject]:
    """Resolve all objects of an export document in document order.

    Objects of unknown or folder kinds are skipped. Objects are deduplicated
    by name and kind; the first occurrence wins.

    Args:
        export_root: Root element of the export document
        object_kinds: Mapping of kind identifiers to human-readable kinds
        source_kinds: Kinds whose objects carry source code

    Returns:
        List of ResolvedObject
    """
    objects = []
    seen: set[tuple[str, str]] = set()

    for object_node in find_all(export_root, "Objects/Object"):
        kind_id = attr(object_node, "type") or ""
        kind = object_kinds.get(kind_id)
        if kind is None or kind == KIND_FOLDER:
            continue

        key = (attr(object_node, "name") or "", kind_id)
        if key in seen:
            logger.debug(f"Skipping duplicate object {key[0]}")
            continue
        seen.add(key)

        objects.append(resolve_object(object_node, kind, source_kinds))

    return objects


def parse_export_document(
    xml_content: bytes,
    source_name: str = "<export>",
    object_kinds: Mapping[str, str] = DEFAULT_OBJECT_KINDS,
    source_kinds: Collection[str] = DEFAULT_SOURCE_KINDS
) -> tuple[list[ResolvedObject], str]:
    """Decode one export XML document and resolve its objects.

    Args:
        xml_content: Raw XML document
        source_name: Name of the document, used in error messages
        object_kinds: Mapping of kind identifiers to human-readable kinds
        source_kinds: Kinds whose objects carry source code

    Returns:
        Tuple of (objects, knowledge base name)

    Raises:
        ExportParseError: If the document is not well-formed XML or declares
            an encoding that cannot be decoded
    """
    try:
        root = ET.fromstring(xml_content)
    except (ET.ParseError, ValueError, LookupError) as e:
        raise ExportParseError(source_name, str(e)) from e

    kb_name = attr(root.find("Source/Version"), "name") or ""
    return assemble_objects(root, object_kinds, source_kinds), kb_name
