from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import Any, Dict

from ..errors import DecodeError
from .base import PathLike, read_text, stringify, write_text

ROOT_TAG = "config"
ENTRY_TAG = "entry"

# Anything outside the XML 1.0 Char production.
_ILLEGAL_XML_CHARS = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _xml_text(text: str) -> str:
    return _ILLEGAL_XML_CHARS.sub("\ufffd", text)


class XMLFormat:
    """``<config>`` document holding one ``<entry>`` per key.

    Layout::

        <config>
          <entry>
            <key>host</key>
            <value>localhost</value>
          </entry>
        </config>

    Values are stored and loaded as strings. Characters XML cannot carry
    (most C0 controls, lone surrogates) are written as U+FFFD.
    """

    name = "xml"

    def load(self, path: PathLike) -> Dict[str, Any]:
        raw = read_text(path)
        try:
            root = ET.fromstring(raw)
        except ET.ParseError as exc:
            raise DecodeError(f"invalid XML in {path}: {exc}") from exc
        if root.tag != ROOT_TAG:
            raise DecodeError(f"{path}: expected <{ROOT_TAG}> root element, got <{root.tag}>")

        result: Dict[str, Any] = {}
        for entry in root.findall(ENTRY_TAG):
            result[entry.findtext("key", default="")] = entry.findtext("value", default="")
        return result

    def save(self, path: PathLike, data: Dict[str, Any]) -> None:
        root = ET.Element(ROOT_TAG)
        for key, value in (data or {}).items():
            entry = ET.SubElement(root, ENTRY_TAG)
            ET.SubElement(entry, "key").text = _xml_text(str(key))
            ET.SubElement(entry, "value").text = _xml_text(stringify(value))

        ET.indent(root, space="  ")
        write_text(path, ET.tostring(root, encoding="unicode"))
