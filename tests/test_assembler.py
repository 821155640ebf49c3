import xml.etree.ElementTree as ET

import pytest

from gxdocgen.assembler import (
    assemble_objects,
    merge_documentation,
    parse_export_document,
    resolve_object,
)
from gxdocgen.errors import ExportParseError
from gxdocgen.models import MODE_NONE, MODE_PARM_RULE, DocComment, ParameterDoc
from gxdocgen.parsers.base import BaseParser
from xml_builders import (
    export_xml,
    object_node,
    object_xml,
    rules_part,
    source_part,
    variable,
    variables_part,
)

FOLDER_KIND = "00000000-0000-0000-0000-000000000008"
UNKNOWN_KIND = "ffffffff-ffff-ffff-ffff-ffffffffffff"


class FailingParser(BaseParser):
    def parse(self, source_code):
        raise ValueError("unreadable annotation")


ANNOTATED_SOURCE = """/**
 * @package users
 * @summary Get User By ID
 * @author Jane Smith
 */
&User.Load(&UserID)"""


def _root(*objects: str) -> ET.Element:
    return ET.fromstring(export_xml(*objects))


class TestResolveObject:
    """Resolution of a single exported object."""

    def test_annotated_procedure_without_params_gets_grafted_parameters(self):
        node = ET.fromstring(object_xml(
            "GetUser",
            source_part(ANNOTATED_SOURCE),
            rules_part("Parm(in:&UserID, out:&UserName);"),
            variables_part(
                variable("UserID", ATTCUSTOMTYPE="bas:Numeric", Description="User identifier"),
            ),
        ))

        obj = resolve_object(node, "Procedure")

        assert obj.signature.extraction_mode == MODE_PARM_RULE
        doc = obj.documentation
        assert doc.is_auto_generated is False
        assert doc.summary == "Get User By ID"
        assert doc.author == "Jane Smith"
        assert doc.parameters == [
            ParameterDoc(name="UserID", direction="IN", type="Numeric",
                         description="User identifier"),
            ParameterDoc(name="UserName", direction="OUT"),
        ]

    def test_documented_params_are_kept(self):
        source = "/**\n * @param UserID IN Character - From the comment\n */"
        node = ET.fromstring(object_xml(
            "GetUser",
            source_part(source),
            rules_part("Parm(in:&UserID, out:&UserName);"),
            variables_part(variable("UserID", ATTCUSTOMTYPE="bas:Numeric")),
        ))

        obj = resolve_object(node, "Procedure")

        assert obj.documentation.parameters == [
            ParameterDoc(name="UserID", direction="IN", type="Character",
                         description="From the comment"),
        ]

    def test_undocumented_procedure_gets_auto_generated_documentation(self):
        node = ET.fromstring(object_xml(
            "GetUser",
            source_part("&User.Load(&UserID)"),
            rules_part("Parm(in:&UserID);"),
            variables_part(variable("UserID", ATTCUSTOMTYPE="bas:Numeric")),
        ))

        obj = resolve_object(node, "Procedure")

        assert obj.documentation.is_auto_generated is True
        assert obj.documentation.parameters == [
            ParameterDoc(name="UserID", direction="IN", type="Numeric"),
        ]

    def test_procedure_without_source_still_gets_auto_documentation(self):
        node = ET.fromstring(object_xml("GetUser", rules_part("Parm(in:&UserID);")))

        obj = resolve_object(node, "Procedure")

        assert obj.source_code == ""
        assert obj.documentation.is_auto_generated is True

    def test_undocumented_procedure_without_params_has_no_documentation(self):
        node = ET.fromstring(object_xml("DoSomething", source_part("&A = 1")))

        obj = resolve_object(node, "Procedure")

        assert obj.documentation is None
        assert obj.signature.raw_signature == "DoSomething();"

    def test_display_name_prefers_description(self):
        node = ET.fromstring(object_xml("GetUser", description="Get a user"))

        obj = resolve_object(node, "Procedure")

        assert obj.name == "Get a user"
        assert obj.path == "GetUser"
        assert obj.xml_description == "Get a user"

    def test_display_name_falls_back_to_name(self):
        node = ET.fromstring(object_xml("GetUser"))

        obj = resolve_object(node, "Procedure")

        assert obj.name == "GetUser"

    def test_signature_uses_object_name_not_description(self):
        node = ET.fromstring(object_xml(
            "GetUser", rules_part("Parm(in:&Id);"), description="Get a user"
        ))

        obj = resolve_object(node, "Procedure")

        assert obj.signature.raw_signature == "GetUser(in:&Id);"

    def test_kind_without_source_is_not_resolved(self):
        node = ET.fromstring(object_xml("Customer", rules_part("Parm(in:&Id);")))

        obj = resolve_object(node, "Transaction")

        assert obj.signature is None
        assert obj.documentation is None
        assert obj.source_code == ""

    def test_configured_source_kind_is_resolved(self):
        node = ET.fromstring(object_xml("Lister", rules_part("Parm(out:&Items);")))

        obj = resolve_object(node, "DataProvider", source_kinds=["DataProvider"])

        assert obj.signature.extraction_mode == MODE_PARM_RULE

    def test_parser_failure_keeps_signature(self, monkeypatch):
        monkeypatch.setattr(
            "gxdocgen.assembler.get_parser_for_kind", lambda kind, source_kinds: FailingParser()
        )
        node = ET.fromstring(object_xml(
            "GetUser", source_part(ANNOTATED_SOURCE), rules_part("Parm(in:&UserID);")
        ))

        obj = resolve_object(node, "Procedure")

        assert obj.signature.raw_signature == "GetUser(in:&UserID);"
        assert obj.documentation.is_auto_generated is True
        assert obj.documentation.summary == ""

    def test_parser_failure_without_parameters_leaves_no_documentation(self, monkeypatch):
        monkeypatch.setattr(
            "gxdocgen.assembler.get_parser_for_kind", lambda kind, source_kinds: FailingParser()
        )
        node = ET.fromstring(object_xml("DoSomething", source_part(ANNOTATED_SOURCE)))

        obj = resolve_object(node, "Procedure")

        assert obj.signature.extraction_mode == MODE_NONE
        assert obj.documentation is None


class TestMergeDocumentation:
    """Reconciliation of parsed documentation with resolved parameters."""

    def test_no_parameters_keeps_doc(self):
        doc = DocComment(summary="Kept")

        assert merge_documentation(doc, object_node(), []) is doc
        assert merge_documentation(None, object_node(), []) is None

    def test_graft_preserves_author_fields(self):
        doc = DocComment(summary="S", author="A", tags=["t"], deprecated=True)
        params = [ParameterDoc(name="X")]

        merged = merge_documentation(doc, object_node(), params)

        assert merged.summary == "S"
        assert merged.author == "A"
        assert merged.tags == ["t"]
        assert merged.deprecated is True
        assert merged.is_auto_generated is False
        assert merged.parameters == params


class TestAssembleObjects:
    """Walking the objects of an export document."""

    def test_objects_in_document_order(self):
        root = _root(object_xml("B"), object_xml("A"), object_xml("C"))

        objects = assemble_objects(root)

        assert [o.path for o in objects] == ["B", "A", "C"]

    def test_duplicates_are_dropped_first_wins(self):
        root = _root(
            object_xml("GetUser", description="First"),
            object_xml("GetUser", description="Second"),
        )

        objects = assemble_objects(root)

        assert len(objects) == 1
        assert objects[0].name == "First"

    def test_same_name_different_kind_is_not_duplicate(self):
        kinds = {"proc-kind": "Procedure", "trn-kind": "Transaction"}
        root = _root(
            object_xml("Customer", kind="proc-kind"),
            object_xml("Customer", kind="trn-kind"),
        )

        objects = assemble_objects(root, object_kinds=kinds)

        assert [o.kind for o in objects] == ["Procedure", "Transaction"]

    def test_unknown_kinds_are_skipped(self):
        root = _root(object_xml("Mystery", kind=UNKNOWN_KIND), object_xml("GetUser"))

        objects = assemble_objects(root)

        assert [o.path for o in objects] == ["GetUser"]

    def test_folders_are_skipped(self):
        kinds = {FOLDER_KIND: "Folder"}
        root = _root(object_xml("Sales", kind=FOLDER_KIND))

        assert assemble_objects(root, object_kinds=kinds) == []

    def test_empty_export(self):
        assert assemble_objects(_root()) == []


class TestParseExportDocument:
    """Decoding whole export documents."""

    def test_returns_objects_and_kb_name(self):
        content = export_xml(object_xml("GetUser"), kb_name="SalesKB").encode("utf-8")

        objects, kb_name = parse_export_document(content)

        assert kb_name == "SalesKB"
        assert [o.path for o in objects] == ["GetUser"]

    def test_missing_kb_name(self):
        content = b"<ExportFile><Objects /></ExportFile>"

        objects, kb_name = parse_export_document(content)

        assert objects == []
        assert kb_name == ""

    def test_malformed_xml_raises(self):
        with pytest.raises(ExportParseError) as exc_info:
            parse_export_document(b"<ExportFile><Objects>", source_name="broken.xml")

        assert exc_info.value.source == "broken.xml"
        assert "broken.xml" in str(exc_info.value)

    def test_unknown_encoding_raises(self):
        content = b'<?xml version="1.0" encoding="bogus-enc"?><ExportFile />'

        with pytest.raises(ExportParseError):
            parse_export_document(content, source_name="bogus.xml")
