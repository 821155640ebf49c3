"""Parser for /** ... */ annotation blocks in GeneXus source code.

Only the first annotation block of a source is read. Inside it, each line
starting with a tag is interpreted:

    /**
     * @package users
     * @summary Get User By ID
     * @param UserID IN Numeric - The unique identifier of the user
     * @deprecated Use GetUserV2 instead
     */

Unknown tags, free text and malformed @param lines are ignored.
"""

import re

from gxdocgen.models import DIRECTIONS, DocComment, ParameterDoc
from gxdocgen.parsers.base import BaseParser

COMMENT_BLOCK_RE = re.compile(r"/\*\*\s*(.*?)\s*\*/", re.DOTALL)

DESCRIPTION_SEPARATOR = " - "

# Tags that set a single text field of DocComment
_FIELD_TAGS = {
    "@package": "package",
    "@summary": "summary",
    "@description": "description",
    "@author": "author",
    "@created": "created",
    "@return": "return_value",
}


def extract_comment_block(source: str) -> str:
    """Find the first /** ... */ block and strip its leading asterisks.

    Args:
        source: Source code text

    Returns:
        Cleaned block content, one line per comment line, or empty string
        if the source has no annotation block
    """
    match = COMMENT_BLOCK_RE.search(source)
    if match is None:
        return ""

    cleaned = []
    for line in match.group(1).split("\n"):
        line = line.strip()
        if line.startswith("*"):
            line = line[1:]
        cleaned.append(line.strip())

    return "\n".join(cleaned)


def parse_parameter(value: str) -> ParameterDoc | None:
    """Parse the value of a @param tag.

    Format: name [IN|OUT|INOUT] Type - Description

    The direction is optional; when the second token is not a direction it
    is taken as the type and the direction defaults to IN.

    Args:
        value: Tag text after "@param"

    Returns:
        ParameterDoc, or None if the value has fewer than two tokens
    """
    param_part, _, description = value.partition(DESCRIPTION_SEPARATOR)

    tokens = param_part.split()
    if len(tokens) < 2:
        return None

    param = ParameterDoc(name=tokens[0], description=description.strip())

    direction = tokens[1].upper()
    if direction in DIRECTIONS:
        param.direction = direction
        if len(tokens) > 2:
            param.type = tokens[2]
    else:
        param.direction = "IN"
        param.type = tokens[1]

    return param


def _apply_tag(line: str, doc: DocComment) -> None:
    tag, _, value = line.partition(" ")
    value = value.strip()

    if tag in _FIELD_TAGS:
        setattr(doc, _FIELD_TAGS[tag], value)
    elif tag == "@param":
        param = parse_parameter(value)
        if param is not None:
            doc.parameters.append(param)
    elif tag == "@tag":
        doc.tags.append(value)
    elif tag == "@deprecated":
        doc.deprecated = True
        doc.deprecation_note = value


def parse(source_code: str) -> DocComment | None:
    """Parse the annotation block of a source into a DocComment.

    Args:
        source_code: Object source code

    Returns:
        DocComment, or None if the source has no /** ... */ block
    """
    block = extract_comment_block(source_code)
    if not block:
        return None

    doc = DocComment()
    for line in block.split("\n"):
        if line.startswith("@"):
            _apply_tag(line, doc)

    return doc


class AnnotationParser(BaseParser):
    """Parser for GeneXus /** ... */ annotation comments."""

    def parse(self, source_code: str) -> DocComment | None:
        return parse(source_code)
