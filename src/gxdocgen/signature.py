"""Procedure signature resolution.

GeneXus exports declare procedure parameters in one of two places:

- the Rules part, as a ``parm(in:&A, out:&B);`` rule (current format)
- the Variables part, as variables flagged with the ``IsParm`` property
  (legacy format)

extract_procedure_signature() tries each source in that order and falls back
to an empty signature, so every procedure gets a well-formed call text.
"""

import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Callable
from dataclasses import dataclass, replace

from gxdocgen.constants import GX_PART_RULES, GX_PART_VARIABLES
from gxdocgen.models import (
    MODE_IS_PARM,
    MODE_NONE,
    MODE_PARM_RULE,
    ParameterDoc,
    Signature,
)
from gxdocgen.type_names import ATTRIBUTE_PREFIX, ATTRIBUTE_TYPE_SENTINEL, clean_type
from gxdocgen.xml_query import attr, find_all, find_first, part_path, text

logger = logging.getLogger(__name__)

PARM_RE = re.compile(r"parm\s*\((.*?)\)", re.IGNORECASE)
PARAM_RE = re.compile(r"^(in|out|inout)\s*:\s*&(.+)$", re.IGNORECASE)
DIRECTION_RE = re.compile(r"\b(in|out|inout)\s*:", re.IGNORECASE)
COLON_SPACE_RE = re.compile(r":\s+&")
COMMA_SPACE_RE = re.compile(r",\s*")

LINE_COMMENT = "//"


@dataclass
class VariableInfo:
    """Metadata read from one Variable element of the Variables part."""
    name: str = ""  # From the Name property
    type: str = ""
    description: str = ""
    is_parm: bool = False


def read_variable(variable_node: ET.Element) -> VariableInfo:
    """Read the property set of a Variable element.

    Args:
        variable_node: A Variable element with Properties/Property children

    Returns:
        VariableInfo with the declared name, cleaned type and description
    """
    info = VariableInfo()
    custom_type = ""
    attribute_based = False

    for prop in find_all(variable_node, "Properties/Property"):
        prop_name = text(prop, "Name")
        prop_value = text(prop, "Value")

        if prop_name == "IsParm":
            info.is_parm = prop_value in ("True", "true")
        elif prop_name == "Name":
            info.name = prop_value
        elif prop_name == "Description":
            info.description = prop_value
        elif prop_name == "ATTCUSTOMTYPE":
            custom_type = clean_type(prop_value)
        elif prop_name == "idBasedOn":
            attribute_based = prop_value.startswith(ATTRIBUTE_PREFIX)

    if custom_type:
        info.type = custom_type
    elif attribute_based:
        info.type = ATTRIBUTE_TYPE_SENTINEL

    return info


def _variables_part(object_node: ET.Element | None) -> ET.Element | None:
    return find_first(object_node, part_path(GX_PART_VARIABLES))


def build_raw_signature(procedure_name: str, parameters: list[ParameterDoc]) -> str:
    """Build the canonical call text for a parameter list.

    Example: GetUser(in:&UserID, out:&UserName);
    """
    if not parameters:
        return f"{procedure_name}();"

    parts = [f"{p.direction.lower()}:&{p.name}" for p in parameters]
    return f"{procedure_name}({', '.join(parts)});"


def _strip_comment_lines(source: str) -> str:
    lines = source.split("\n")
    return "\n".join(line for line in lines if not line.strip().startswith(LINE_COMMENT))


def _normalize_call_text(call_text: str) -> str:
    """Normalize direction casing and spacing in a parm call."""
    call_text = DIRECTION_RE.sub(lambda m: m.group(1).lower() + ":", call_text)
    call_text = COLON_SPACE_RE.sub(":&", call_text)
    call_text = COMMA_SPACE_RE.sub(", ", call_text)
    return call_text.strip()


def parse_parm_string(source: str, procedure_name: str) -> Signature | None:
    """Parse a parm(...) rule from the Rules part source.

    Lines starting with // are ignored. Argument segments that do not look
    like ``direction:&Name`` are dropped.

    Args:
        source: Rules part source text
        procedure_name: Name substituted for the parm keyword

    Returns:
        Signature, or None if there is no parm rule or it declares no
        recognizable parameter
    """
    source = _strip_comment_lines(source)

    match = PARM_RE.search(source)
    if match is None:
        return None

    params_str = match.group(1)
    if not params_str.strip():
        return Signature(parameters=[], raw_signature=f"{procedure_name}();")

    parameters = []
    for segment in params_str.split(","):
        segment = segment.strip()
        if not segment:
            continue

        param_match = PARAM_RE.match(segment)
        if param_match:
            parameters.append(ParameterDoc(
                name=param_match.group(2).strip(),
                direction=param_match.group(1).upper(),
            ))

    if not parameters:
        return None

    raw_signature = _normalize_call_text(f"{procedure_name}({params_str})") + ";"
    return Signature(parameters=parameters, raw_signature=raw_signature)


def extract_from_parm_rule(object_node: ET.Element | None, procedure_name: str) -> Signature | None:
    """Resolve the signature from the parm rule in the Rules part."""
    source = text(object_node, part_path(GX_PART_RULES) + "/Source")
    if not source:
        return None
    return parse_parm_string(source, procedure_name)


def extract_from_is_parm_variables(
    object_node: ET.Element | None,
    procedure_name: str
) -> Signature | None:
    """Resolve the signature from variables flagged with IsParm.

    The legacy format carries no direction, so every parameter is IN.
    """
    variables_part = _variables_part(object_node)
    if variables_part is None:
        return None

    parameters = []
    for variable_node in find_all(variables_part, ".//Variable"):
        info = read_variable(variable_node)
        if info.is_parm and info.name:
            parameters.append(ParameterDoc(
                name=info.name,
                direction="IN",
                type=info.type,
                description=info.description,
            ))

    if not parameters:
        return None

    return Signature(
        parameters=parameters,
        raw_signature=build_raw_signature(procedure_name, parameters),
    )


SignatureStrategy = Callable[[ET.Element | None, str], Signature | None]

# Ordered by authority; the first strategy returning a signature wins
STRATEGIES: tuple[tuple[str, SignatureStrategy], ...] = (
    (MODE_PARM_RULE, extract_from_parm_rule),
    (MODE_IS_PARM, extract_from_is_parm_variables),
)


def extract_procedure_signature(object_node: ET.Element | None, procedure_name: str) -> Signature:
    """Extract a procedure's signature with fallback across metadata sources.

    Priority: parm rule, then IsParm variables, then an empty signature.

    Args:
        object_node: The object's XML element
        procedure_name: Name used in the canonical call text

    Returns:
        Signature with extraction_mode set to the source that supplied it
    """
    for mode, strategy in STRATEGIES:
        sig = strategy(object_node, procedure_name)
        if sig is not None:
            sig.extraction_mode = mode
            logger.debug(f"Resolved signature of {procedure_name} via {mode}")
            return sig

    return Signature(
        parameters=[],
        raw_signature=f"{procedure_name}();",
        extraction_mode=MODE_NONE,
    )


def enrich_with_variable_metadata(
    parameters: list[ParameterDoc],
    object_node: ET.Element | None
) -> list[ParameterDoc]:
    """Fill empty parameter types and descriptions from the Variables part.

    Variables are matched by their Name attribute. Values already present on
    a parameter are never overwritten.

    Args:
        parameters: Parameters to enrich (not modified)
        object_node: The object's XML element

    Returns:
        New list of parameters in the same order
    """
    variables_part = _variables_part(object_node)
    if variables_part is None:
        return list(parameters)

    metadata: dict[str, VariableInfo] = {}
    for variable_node in find_all(variables_part, ".//Variable"):
        name = attr(variable_node, "Name")
        if not name:
            continue
        metadata[name] = read_variable(variable_node)

    enriched = []
    for param in parameters:
        info = metadata.get(param.name)
        if info is None:
            enriched.append(param)
            continue
        enriched.append(replace(
            param,
            type=param.type or info.type,
            description=param.description or info.description,
        ))

    return enriched
