from dataclasses import dataclass, field

DIRECTIONS = ("IN", "OUT", "INOUT")

MODE_PARM_RULE = "ParmRule"
MODE_IS_PARM = "IsParm"
MODE_NONE = "None"


@dataclass
class ParameterDoc:
    """Represents a procedure parameter."""
    name: str
    direction: str = "IN"  # One of DIRECTIONS
    type: str = ""  # Empty until enriched from variable metadata
    description: str = ""


@dataclass
class Signature:
    """Represents a procedure's resolved parameter signature."""
    parameters: list[ParameterDoc]
    raw_signature: str  # Canonical call text, e.g. "GetUser(in:&UserID);"
    extraction_mode: str = MODE_NONE  # Which metadata source supplied the parameters


@dataclass
class DocComment:
    """Structured documentation parsed from a /** ... */ annotation block."""
    package: str = ""
    summary: str = ""
    description: str = ""
    author: str = ""
    created: str = ""
    return_value: str = ""  # Raw text of the @return tag
    tags: list[str] = field(default_factory=list)
    deprecated: bool = False
    deprecation_note: str = ""
    parameters: list[ParameterDoc] = field(default_factory=list)
    is_auto_generated: bool = False  # True when synthesized from metadata only


@dataclass
class ResolvedObject:
    """A knowledge base object with its signature and merged documentation."""
    name: str  # Display name (description when present)
    kind: str
    path: str  # Raw object name, used for file naming
    source_code: str = ""
    signature: Signature | None = None  # None for kinds without source
    xml_description: str = ""
    documentation: DocComment | None = None  # None if undocumented


@dataclass
class ExtractResult:
    """Result of extracting one export package."""
    objects: list[ResolvedObject]
    kb_name: str = ""
    warnings: list[str] = field(default_factory=list)  # Non-fatal advisories
