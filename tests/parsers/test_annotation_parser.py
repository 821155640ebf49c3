from gxdocgen.models import DocComment, ParameterDoc
from gxdocgen.parsers.annotation_parser import (
    AnnotationParser,
    extract_comment_block,
    parse,
    parse_parameter,
)


def test_parse_valid_comment():
    source = """/**
 * @package users
 * @summary Get User By ID
 * @description Retrieves user information from the database based on the provided user ID.
 * @param UserID IN Numeric:UserId - The unique identifier of the user
 * @param User OUT User - User business component with complete information
 * @author Jane Smith
 * @created 2025-11-13
 */

&User.Load(&UserID)
If &User.Fail()
	&Messages = &User.GetMessages()
EndIf"""

    doc = parse(source)

    assert doc is not None
    assert doc.package == "users"
    assert doc.summary == "Get User By ID"
    assert doc.description == (
        "Retrieves user information from the database based on the provided user ID."
    )
    assert doc.author == "Jane Smith"
    assert doc.created == "2025-11-13"
    assert doc.is_auto_generated is False
    assert doc.parameters == [
        ParameterDoc(name="UserID", direction="IN", type="Numeric:UserId",
                     description="The unique identifier of the user"),
        ParameterDoc(name="User", direction="OUT", type="User",
                     description="User business component with complete information"),
    ]


def test_parse_without_comment_returns_none():
    source = """&User.Load(&UserID)
If &User.Fail()
EndIf"""

    assert parse(source) is None


def test_parse_plain_block_comment_returns_none():
    assert parse("/* not an annotation */\n&A = 1") is None


def test_parse_only_first_block():
    source = """/**
 * @summary First
 */
/**
 * @summary Second
 * @tag Ignored
 */"""

    doc = parse(source)

    assert doc.summary == "First"
    assert doc.tags == []


def test_parse_deprecated_tag():
    source = """/**
 * @package legacy
 * @deprecated Use NewAuthenticateUser instead
 */
Parm();"""

    doc = parse(source)

    assert doc.deprecated is True
    assert doc.deprecation_note == "Use NewAuthenticateUser instead"


def test_parse_deprecated_without_note():
    doc = parse("/** @deprecated */")

    assert doc.deprecated is True
    assert doc.deprecation_note == ""


def test_parse_return_tag_is_raw():
    source = """/**
 * @return Numeric - The calculated total
 */"""

    doc = parse(source)

    assert doc.return_value == "Numeric - The calculated total"


def test_parse_multiple_tags_in_order():
    source = """/**
 * @tag Customers
 * @tag API
 */"""

    doc = parse(source)

    assert doc.tags == ["Customers", "API"]


def test_parse_ignores_free_text_and_unknown_tags():
    source = """/**
 * Some free text that is not captured.
 * @since 1.2
 * @summary Kept
 */"""

    doc = parse(source)

    assert doc == DocComment(summary="Kept")


def test_parse_drops_malformed_param():
    source = """/**
 * @param Lonely
 * @param Good IN Numeric
 */"""

    doc = parse(source)

    assert [p.name for p in doc.parameters] == ["Good"]


def test_parse_block_on_single_line():
    doc = parse("/** @summary Inline */ &A = 1")

    assert doc.summary == "Inline"


def test_parse_parameter_inout():
    param = parse_parameter("OrderData INOUT sdtOrder - Order information")

    assert param == ParameterDoc(
        name="OrderData", direction="INOUT", type="sdtOrder", description="Order information"
    )


def test_parse_parameter_without_direction_defaults_to_in():
    param = parse_parameter("CustomerID Numeric - Customer identifier")

    assert param.direction == "IN"
    assert param.type == "Numeric"
    assert param.description == "Customer identifier"


def test_parse_parameter_direction_is_case_insensitive():
    param = parse_parameter("Result out Boolean")

    assert param.direction == "OUT"
    assert param.type == "Boolean"


def test_parse_parameter_direction_without_type():
    param = parse_parameter("Result OUT - Outcome")

    assert param.direction == "OUT"
    assert param.type == ""
    assert param.description == "Outcome"


def test_parse_parameter_without_description():
    param = parse_parameter("Status OUT Boolean")

    assert param.description == ""


def test_parse_parameter_splits_on_first_separator():
    param = parse_parameter("Range IN Numeric - From - To")

    assert param.description == "From - To"


def test_parse_parameter_with_single_token_returns_none():
    assert parse_parameter("Lonely") is None
    assert parse_parameter("Lonely - described") is None
    assert parse_parameter("") is None


def test_extract_comment_block():
    source = """/**
 * @package test
 * @summary Test Summary
 */
Some code here"""

    block = extract_comment_block(source)

    assert block.split("\n") == ["@package test", "@summary Test Summary"]


def test_extract_comment_block_without_comment():
    assert extract_comment_block("Just some code without comments") == ""


def test_annotation_parser_delegates_to_parse():
    parser = AnnotationParser()

    doc = parser.parse("/** @summary Via class */")

    assert doc.summary == "Via class"
    assert parser.parse("no comment") is None
