"""
KML output: one Placemark per GeoNode, all sharing a single icon style.

    <kml><Document>
      <name/> <Style id="redIcon">...</Style>
      <Placemark><name/><description/><styleUrl/><Point><coordinates/></Point></Placemark>
    </Document></kml>
"""

import xml.etree.ElementTree as ET
from typing import Iterable, Optional

from .constants import (
    DEFAULT_DOCUMENT_NAME,
    DEFAULT_ICON_COLOR,
    DEFAULT_ICON_HREF,
    KML_NAMESPACE,
    PLACEMARK_STYLE_ID,
)
from .models import GeoNode

ET.register_namespace("", KML_NAMESPACE)


def _tag(name: str) -> str:
    return f"{{{KML_NAMESPACE}}}{name}"


def _sub(parent: ET.Element, name: str, text: Optional[str] = None) -> ET.Element:
    element = ET.SubElement(parent, _tag(name))
    if text is not None:
        element.text = text
    return element


def node_description(node: GeoNode) -> str:
    return "\n".join(f"<li>{line}</li>" for line in node.description)


class KmlWriter:

    def __init__(
        self,
        document_name: str = DEFAULT_DOCUMENT_NAME,
        icon_href: str = DEFAULT_ICON_HREF,
        icon_color: str = DEFAULT_ICON_COLOR,
    ):
        self.kml = ET.Element(_tag("kml"))
        self.document = _sub(self.kml, "Document")
        _sub(self.document, "name", document_name)

        style = _sub(self.document, "Style")
        style.set("id", PLACEMARK_STYLE_ID)
        icon_style = _sub(style, "IconStyle")
        _sub(icon_style, "color", icon_color)
        icon = _sub(icon_style, "Icon")
        _sub(icon, "href", icon_href)

        self.placemark_count = 0

    def add_node(self, node: GeoNode):
        placemark = _sub(self.document, "Placemark")
        _sub(placemark, "name", node.name.strip())
        _sub(placemark, "description", node_description(node).strip())
        _sub(placemark, "styleUrl", f"#{PLACEMARK_STYLE_ID}")
        point = _sub(placemark, "Point")
        _sub(point, "coordinates", node.kml_coordinates)
        self.placemark_count += 1

    def add_nodes(self, nodes: Iterable[GeoNode]):
        for node in nodes:
            self.add_node(node)

    def _tree(self) -> ET.ElementTree:
        tree = ET.ElementTree(self.kml)
        ET.indent(tree, space="  ")
        return tree

    def to_string(self) -> str:
        tree = self._tree()
        return ET.tostring(tree.getroot(), encoding="unicode", xml_declaration=True)

    def write(self, path: str):
        self._tree().write(path, encoding="UTF-8", xml_declaration=True)

    def __str__(self):
        return self.to_string()
