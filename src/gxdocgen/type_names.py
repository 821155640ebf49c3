ATTRIBUTE_PREFIX = "Attribute:"

# Type of a variable based on an attribute; the export does not carry it
ATTRIBUTE_TYPE_SENTINEL = "-"


def clean_type(raw_type: str) -> str:
    """Strip namespace qualifiers from a GeneXus type name.

    Examples:
        "bas:Boolean" -> "Boolean"
        "sdt:Messages, GeneXus.Common" -> "Messages"
        "Attribute:UserId" -> "Attribute:UserId" (kept as-is)

    Qualifiers are stripped until none is left, so nested qualifiers such as
    "a:b:Type" also reduce to "Type" and the function is idempotent.

    Args:
        raw_type: Type string as found in variable properties

    Returns:
        Bare type name
    """
    raw_type = raw_type.strip()

    while ":" in raw_type and not raw_type.startswith(ATTRIBUTE_PREFIX):
        raw_type = raw_type.split(":", 1)[1]
        # Drop the package suffix, e.g. "Messages, GeneXus.Common"
        if "," in raw_type:
            raw_type = raw_type.split(",", 1)[0]
        raw_type = raw_type.strip()

    return raw_type
