"""SVG markup loading and serialization."""

import xml.etree.ElementTree as ET

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"

# 輸出時保留預設 namespace，避免出現 ns0: 前綴
ET.register_namespace("", SVG_NAMESPACE)
ET.register_namespace("xlink", XLINK_NAMESPACE)


def load_svg(svg_text: str) -> ET.Element:
    """Parse SVG text and return its root element."""
    return ET.fromstring(svg_text.strip())


def dump_svg(element: ET.Element) -> str:
    return ET.tostring(element, encoding="unicode")
