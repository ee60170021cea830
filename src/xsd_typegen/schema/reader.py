"""Read XML Schema text into the schema object model."""

from __future__ import annotations

from lxml import etree

from xsd_typegen.errors import Diagnostic, DiagnosticKind, DiagnosticSeverity, SchemaLoadError
from xsd_typegen.namespaces import XSD, xsd_tag
from xsd_typegen.schema.cardinality import parse_max_occurs, parse_min_occurs
from xsd_typegen.schema.model import (
    XS_STRING,
    AttributeDecl,
    ChoiceGroup,
    ComplexTypeDecl,
    Declaration,
    ElementDecl,
    Facet,
    FacetKind,
    ParticleGroup,
    QName,
    Restriction,
    Schema,
    SequenceGroup,
    SimpleTypeDecl,
    TopLevelElementDecl,
)

_FACET_TAGS = {xsd_tag(kind.value): kind for kind in FacetKind}
_TRUE_VALUES = {"true", "1"}


def read_schema(text: str | bytes) -> Schema:
    """Parse XSD text into a Schema.

    Args:
        text: The schema document.

    Returns:
        The Schema with its supported top-level declarations in document order.

    Raises:
        SchemaLoadError: If the text is not well-formed XML or not an XSD schema.
    """
    if isinstance(text, str):
        text = text.strip().encode("utf-8")
    else:
        text = text.strip()

    parser = etree.XMLParser(remove_comments=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(text, parser)
    except etree.XMLSyntaxError as exc:
        raise SchemaLoadError(
            f"Invalid XML: {exc}",
            [_schema_error(f"Schema is not well-formed XML: {exc}")],
        ) from exc

    if root.tag != xsd_tag("schema"):
        raise SchemaLoadError(
            f"Invalid schema format: root element is {root.tag}",
            [_schema_error(f"Invalid schema format: expected xs:schema root, got {root.tag}")],
        )

    return SchemaReader().read(root)


def _schema_error(message: str, node: str | None = None) -> Diagnostic:
    return Diagnostic(
        kind=DiagnosticKind.SCHEMA,
        message=message,
        severity=DiagnosticSeverity.ERROR,
        node=node,
    )


class SchemaReader:
    """Builds schema model objects from lxml elements.

    Only the supported subset is read: named complex types, global elements
    with inline complex types, and simple types with a restriction. Other
    top-level constructs (group, attributeGroup, import, include, notation,
    annotation) are skipped.
    """

    def read(self, root: etree._Element) -> Schema:
        declarations: list[Declaration] = []

        for child in _xsd_children(root):
            if child.tag == xsd_tag("complexType"):
                declarations.append(self._read_complex_type(child, child.get("name")))
            elif child.tag == xsd_tag("element"):
                declarations.append(self._read_top_level_element(child))
            elif child.tag == xsd_tag("simpleType"):
                declarations.append(self._read_simple_type(child))

        return Schema(
            declarations=tuple(declarations),
            target_namespace=root.get("targetNamespace"),
        )

    def _read_complex_type(self, node: etree._Element, name: str | None) -> ComplexTypeDecl:
        attributes: list[AttributeDecl] = []
        particle: ParticleGroup | None = None

        for child in _xsd_children(node):
            if child.tag == xsd_tag("attribute"):
                attribute = self._read_attribute(child)
                if attribute is not None:
                    attributes.append(attribute)
            elif child.tag == xsd_tag("sequence") and particle is None:
                particle = SequenceGroup(self._read_particle_elements(child))
            elif child.tag == xsd_tag("choice") and particle is None:
                particle = ChoiceGroup(self._read_particle_elements(child))

        return ComplexTypeDecl(name=name, attributes=tuple(attributes), particle=particle)

    def _read_top_level_element(self, node: etree._Element) -> TopLevelElementDecl:
        name = _required_name(node)
        inline = node.find(xsd_tag("complexType"))
        complex_type = self._read_complex_type(inline, None) if inline is not None else None
        type_ref = node.get("type")

        return TopLevelElementDecl(
            name=name,
            complex_type=complex_type,
            type_name=_resolve_qname(node, type_ref) if type_ref else None,
        )

    def _read_simple_type(self, node: etree._Element) -> SimpleTypeDecl:
        name = _required_name(node)
        restriction_node = node.find(xsd_tag("restriction"))
        restriction = None
        if restriction_node is not None:
            restriction = self._read_restriction(restriction_node)
        return SimpleTypeDecl(name=name, restriction=restriction)

    def _read_restriction(self, node: etree._Element) -> Restriction:
        base = node.get("base")
        facets = [
            Facet(_FACET_TAGS[child.tag], child.get("value", ""))
            for child in _xsd_children(node)
            if child.tag in _FACET_TAGS
        ]
        return Restriction(
            base=_resolve_qname(node, base) if base else XS_STRING,
            facets=tuple(facets),
        )

    def _read_particle_elements(self, node: etree._Element) -> tuple[ElementDecl, ...]:
        elements: list[ElementDecl] = []
        for child in _xsd_children(node):
            if child.tag != xsd_tag("element"):
                continue
            name = child.get("name")
            if not name:
                # Element references need cross-declaration resolution
                continue
            elements.append(self._read_local_element(child, name))
        return tuple(elements)

    def _read_local_element(self, node: etree._Element, name: str) -> ElementDecl:
        type_ref = node.get("type")
        try:
            min_occurs = parse_min_occurs(node.get("minOccurs"))
            max_occurs = parse_max_occurs(node.get("maxOccurs"))
        except ValueError as exc:
            raise SchemaLoadError(
                f"Invalid occurrence constraint on element '{name}': {exc}",
                [_schema_error(f"Invalid occurrence constraint: {exc}", node=name)],
            ) from exc

        return ElementDecl(
            name=name,
            type_name=_resolve_qname(node, type_ref) if type_ref else XS_STRING,
            min_occurs=min_occurs,
            max_occurs=max_occurs,
            nillable=node.get("nillable", "false").strip() in _TRUE_VALUES,
        )

    def _read_attribute(self, node: etree._Element) -> AttributeDecl | None:
        name = node.get("name")
        if not name:
            return None
        type_ref = node.get("type")
        return AttributeDecl(
            name=name,
            type_name=_resolve_qname(node, type_ref) if type_ref else XS_STRING,
            use=node.get("use", "optional"),
        )


def _xsd_children(node: etree._Element) -> list[etree._Element]:
    """Get child elements in the XML Schema namespace, skipping annotations."""
    return [
        child
        for child in node
        if isinstance(child.tag, str)
        and child.tag.startswith(f"{{{XSD}}}")
        and child.tag != xsd_tag("annotation")
    ]


def _required_name(node: etree._Element) -> str:
    name = node.get("name")
    if not name:
        local_name = etree.QName(node).localname
        raise SchemaLoadError(
            f"Top-level {local_name} without a name",
            [_schema_error(f"Top-level {local_name} is missing its name attribute", node=local_name)],
        )
    return name


def _resolve_qname(node: etree._Element, value: str) -> QName:
    """Resolve a prefixed QName attribute value against in-scope namespaces."""
    value = value.strip()
    if ":" in value:
        prefix, local_name = value.split(":", 1)
        return QName(node.nsmap.get(prefix), local_name)
    return QName(node.nsmap.get(None), value)
