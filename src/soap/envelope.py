"""Reading and writing SOAP 1.1 envelopes for the products service."""

import xml.etree.ElementTree as ET
from typing import Any

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SERVICE_NS = "urn:catalog:products"

ET.register_namespace("soap", SOAP_ENV_NS)
ET.register_namespace("tns", SERVICE_NS)


class EnvelopeError(ValueError):
    pass


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_request(body: bytes | str) -> tuple[str, dict[str, str]]:
    """
    Extract the operation name and its arguments from a request envelope.

    Arguments are the direct children of the operation element, keyed by
    local name. Elements that are absent are absent from the dict; an empty
    element gives an empty string.

    Raises:
        EnvelopeError: When the payload is not a SOAP envelope with an operation
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise EnvelopeError(f"Malformed XML: {e}") from e

    if root.tag != f"{{{SOAP_ENV_NS}}}Envelope":
        raise EnvelopeError("Root element is not a SOAP Envelope")

    soap_body = root.find(f"{{{SOAP_ENV_NS}}}Body")
    if soap_body is None or len(soap_body) == 0:
        raise EnvelopeError("SOAP Body is missing or empty")

    operation = soap_body[0]
    args = {_local_name(child.tag): (child.text or "").strip() for child in operation}
    return _local_name(operation.tag), args


def _append_value(parent: ET.Element, name: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, list):
        for item in value:
            _append_value(parent, name, item)
        return

    element = ET.SubElement(parent, name)
    if isinstance(value, dict):
        for key, item in value.items():
            _append_value(element, key, item)
    else:
        element.text = str(value)


def _envelope() -> tuple[ET.Element, ET.Element]:
    envelope = ET.Element(f"{{{SOAP_ENV_NS}}}Envelope")
    body = ET.SubElement(envelope, f"{{{SOAP_ENV_NS}}}Body")
    return envelope, body


def build_response(operation: str, result: dict[str, Any]) -> bytes:
    """Serialize an operation result as <tns:OperationResponse>."""
    envelope, body = _envelope()
    response = ET.SubElement(body, f"{{{SERVICE_NS}}}{operation}Response")
    for key, value in result.items():
        _append_value(response, key, value)
    return ET.tostring(envelope, encoding="utf-8", xml_declaration=True)


def build_fault(fault_string: str, detail: str | None = None, code: str = "Server") -> bytes:
    """Serialize a SOAP 1.1 Fault."""
    envelope, body = _envelope()
    fault = ET.SubElement(body, f"{{{SOAP_ENV_NS}}}Fault")
    ET.SubElement(fault, "faultcode").text = f"soap:{code}"
    ET.SubElement(fault, "faultstring").text = fault_string
    if detail:
        ET.SubElement(fault, "detail").text = detail
    return ET.tostring(envelope, encoding="utf-8", xml_declaration=True)
