from collections.abc import Collection

from gxdocgen.constants import DEFAULT_SOURCE_KINDS
from gxdocgen.parsers.annotation_parser import AnnotationParser
from gxdocgen.parsers.base import BaseParser


def get_parser_for_kind(
    kind: str,
    source_kinds: Collection[str] = DEFAULT_SOURCE_KINDS
) -> BaseParser | None:
    """Return the documentation parser for an object kind.

    Args:
        kind: Human-readable object kind, e.g. "Procedure"
        source_kinds: Kinds whose objects carry annotated source code

    Returns:
        Parser instance, or None if the kind carries no source code
    """
    if kind not in source_kinds:
        return None
    return AnnotationParser()
