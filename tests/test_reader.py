"""Tests for reading XSD text into the schema model."""

from __future__ import annotations

import pytest

from xsd_typegen import SchemaLoadError
from xsd_typegen.namespaces import XSD
from xsd_typegen.schema import (
    UNBOUNDED,
    ChoiceGroup,
    ComplexTypeDecl,
    FacetKind,
    QName,
    SequenceGroup,
    SimpleTypeDecl,
    TopLevelElementDecl,
    read_schema,
)
from tests.fixture_loader import load_fixture_bytes, load_schema

SCHEMA_OPEN = '<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">'
SCHEMA_CLOSE = "</xs:schema>"


def wrap(body: str) -> str:
    return f"{SCHEMA_OPEN}{body}{SCHEMA_CLOSE}"


class TestReadSchema:
    """Tests for document-level reading."""

    def test_note_schema(self) -> None:
        schema = read_schema(load_schema("note.xsd"))

        assert schema.target_namespace == "https://www.w3schools.com"
        assert len(schema) == 1
        note = schema.declarations[0]
        assert isinstance(note, ComplexTypeDecl)
        assert note.name == "Note"
        assert isinstance(note.particle, SequenceGroup)
        assert [e.name for e in note.elements] == ["to", "from", "heading", "body"]
        assert all(e.type_name == QName(XSD, "string") for e in note.elements)

    def test_reads_bytes(self) -> None:
        schema = read_schema(load_fixture_bytes("schemas", "note.xsd"))
        assert len(schema) == 1

    def test_leading_whitespace_is_ignored(self) -> None:
        schema = read_schema("\n\n  " + load_schema("note.xsd"))
        assert len(schema) == 1

    def test_document_order(self) -> None:
        schema = read_schema(load_schema("advanced-schema.xsd"))
        names = [d.name for d in schema]
        assert names == [
            "EmailAddress",
            "Username",
            "CountryCode",
            "Percentage",
            "Price",
            "EventTime",
            "Quantity",
            "User",
        ]

    def test_unsupported_top_level_constructs_skipped(self) -> None:
        schema = read_schema(
            wrap(
                '<xs:import namespace="urn:other"/>'
                '<xs:group name="G"><xs:sequence/></xs:group>'
                '<xs:attributeGroup name="AG"/>'
                '<xs:complexType name="Kept"/>'
            )
        )
        assert [d.name for d in schema] == ["Kept"]

    def test_empty_schema(self) -> None:
        assert len(read_schema(wrap(""))) == 0


class TestReadErrors:
    """Tests for documents that cannot be read."""

    def test_malformed_xml(self) -> None:
        with pytest.raises(SchemaLoadError) as exc_info:
            read_schema(load_schema("malformed.xsd"))

        assert "Invalid XML" in str(exc_info.value)
        assert len(exc_info.value.diagnostics) == 1

    def test_wrong_root_element(self) -> None:
        with pytest.raises(SchemaLoadError) as exc_info:
            read_schema("<root/>")

        assert "Invalid schema format" in str(exc_info.value)

    def test_nameless_simple_type(self) -> None:
        with pytest.raises(SchemaLoadError) as exc_info:
            read_schema(wrap('<xs:simpleType><xs:restriction base="xs:string"/></xs:simpleType>'))

        assert "without a name" in str(exc_info.value)

    def test_invalid_max_occurs(self) -> None:
        body = (
            '<xs:complexType name="T"><xs:sequence>'
            '<xs:element name="e" type="xs:string" maxOccurs="lots"/>'
            "</xs:sequence></xs:complexType>"
        )
        with pytest.raises(SchemaLoadError) as exc_info:
            read_schema(wrap(body))

        assert exc_info.value.diagnostics[0].node == "e"


class TestComplexTypes:
    """Tests for complex type content."""

    def test_occurrence_constraints(self) -> None:
        library = read_schema(load_schema("cardinality-test.xsd")).declarations[0]
        by_name = {e.name: e for e in library.elements}

        assert by_name["name"].min_occurs == 1
        assert by_name["name"].max_occurs == 1
        assert by_name["address"].min_occurs == 0
        assert by_name["books"].max_occurs is UNBOUNDED
        assert by_name["shelves"].max_occurs == 10

    def test_choice_group(self) -> None:
        payment = read_schema(load_schema("cardinality-test.xsd")).declarations[1]
        assert isinstance(payment.particle, ChoiceGroup)
        assert [e.name for e in payment.elements] == ["card", "transfer"]

    def test_nillable(self) -> None:
        product = read_schema(load_schema("nillable-test.xsd")).declarations[0]
        nillable = {e.name: e.nillable for e in product.elements}
        assert nillable == {"sku": False, "description": True, "tags": True, "price": False}

    def test_attributes(self) -> None:
        person = read_schema(load_schema("attributes-test.xsd")).declarations[0]
        attributes = {a.name: a for a in person.attributes}

        assert attributes["id"].required
        assert attributes["id"].type_name == QName(XSD, "int")
        assert not attributes["verified"].required
        assert attributes["nickname"].type_name == QName(XSD, "string")

    def test_untyped_element_defaults_to_string(self) -> None:
        body = (
            '<xs:complexType name="T"><xs:sequence>'
            '<xs:element name="anything"/>'
            "</xs:sequence></xs:complexType>"
        )
        element = read_schema(wrap(body)).declarations[0].elements[0]
        assert element.type_name == QName(XSD, "string")

    def test_element_refs_skipped(self) -> None:
        body = (
            '<xs:complexType name="T"><xs:sequence>'
            '<xs:element ref="other"/><xs:element name="kept" type="xs:int"/>'
            "</xs:sequence></xs:complexType>"
        )
        complex_type = read_schema(wrap(body)).declarations[0]
        assert [e.name for e in complex_type.elements] == ["kept"]

    def test_anonymous_top_level_complex_type(self) -> None:
        complex_type = read_schema(wrap("<xs:complexType/>")).declarations[0]
        assert complex_type.name is None
        assert complex_type.particle is None
        assert complex_type.elements == ()

    def test_custom_prefix(self) -> None:
        all_types = read_schema(load_schema("types-test.xsd")).declarations[0]
        by_name = {e.name: e.type_name for e in all_types.elements}

        assert by_name["count"] == QName(XSD, "int")
        assert by_name["status"] == QName(None, "StatusType")


class TestTopLevelElements:
    """Tests for global element declarations."""

    def test_inline_complex_type(self) -> None:
        user = read_schema(load_schema("advanced-schema.xsd")).declarations[-1]

        assert isinstance(user, TopLevelElementDecl)
        assert user.name == "User"
        assert user.complex_type is not None
        assert user.complex_type.name is None
        assert [e.name for e in user.complex_type.elements] == ["username", "email", "age"]
        assert [a.name for a in user.complex_type.attributes] == ["id"]

    def test_typed_element(self) -> None:
        element = read_schema(wrap('<xs:element name="note" type="xs:string"/>')).declarations[0]
        assert element.complex_type is None
        assert element.type_name == QName(XSD, "string")


class TestSimpleTypes:
    """Tests for simple type restrictions."""

    def test_facets_in_document_order(self) -> None:
        country = read_schema(load_schema("advanced-schema.xsd")).declarations[2]

        assert isinstance(country, SimpleTypeDecl)
        assert country.restriction.base == QName(XSD, "string")
        assert [f.kind for f in country.restriction.facets] == [FacetKind.PATTERN, FacetKind.LENGTH]

    def test_enumeration_values(self) -> None:
        status = read_schema(load_schema("enum-test.xsd")).declarations[0]
        assert status.restriction.values_of(FacetKind.ENUMERATION) == [
            "active",
            "inactive",
            "pending",
        ]

    def test_annotation_ignored(self) -> None:
        priority = read_schema(load_schema("enum-test.xsd")).declarations[1]
        assert priority.restriction is not None
        assert len(priority.restriction.facets) == 4

    def test_without_restriction(self) -> None:
        body = '<xs:simpleType name="L"><xs:list itemType="xs:int"/></xs:simpleType>'
        simple_type = read_schema(wrap(body)).declarations[0]
        assert simple_type.restriction is None

    def test_unknown_facet_ignored(self) -> None:
        body = (
            '<xs:simpleType name="S"><xs:restriction base="xs:string">'
            '<xs:whiteSpace value="collapse"/><xs:maxLength value="4"/>'
            "</xs:restriction></xs:simpleType>"
        )
        restriction = read_schema(wrap(body)).declarations[0].restriction
        assert [f.kind for f in restriction.facets] == [FacetKind.MAX_LENGTH]
