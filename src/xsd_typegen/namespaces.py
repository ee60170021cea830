"""XML namespace constants."""

# XML Schema
XSD = "http://www.w3.org/2001/XMLSchema"


def xsd_tag(local_name: str) -> str:
    """Get the Clark notation tag for an XML Schema element."""
    return f"{{{XSD}}}{local_name}"
