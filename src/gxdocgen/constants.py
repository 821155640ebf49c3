"""GeneXus metadata identifiers.

Object kinds and object parts are identified in export XML by fixed GUIDs.
"""

# Object kinds
GX_TYPE_PROCEDURE = "84a12160-f59b-4ad7-a683-ea4481ac23e9"

# Object parts
GX_PART_SOURCE_CODE = "528d1c06-a9c2-420d-bd35-21dca83f12ff"
GX_PART_RULES = "9b0a32a3-de6d-4be1-a4dd-1b85d3741534"
GX_PART_VARIABLES = "e4c4ade7-53f0-4a56-bdfd-843735b66f47"

KIND_PROCEDURE = "Procedure"
KIND_FOLDER = "Folder"

# Human-readable names for object kind GUIDs
DEFAULT_OBJECT_KINDS: dict[str, str] = {
    GX_TYPE_PROCEDURE: KIND_PROCEDURE,
}

# Kinds whose objects carry source code and parameter declarations
DEFAULT_SOURCE_KINDS = (KIND_PROCEDURE,)
