"""Information-need file parser.

Reads the batch XML file::

    <informationNeeds>
      <informationNeed>
        <identifier>Q1</identifier>
        <text>Trabajos de grado dirigidos por ...</text>
      </informationNeed>
    </informationNeeds>

into `InformationNeed` objects in file order.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from ZaguanSearch.core.errors import MalformedInputFileError
from ZaguanSearch.core.models import InformationNeed

ROOT_TAG = "informationNeeds"
NEED_TAG = "informationNeed"


def _child_text(elem: ET.Element, tag: str, position: int) -> str:
    child = elem.find(tag)
    if child is None:
        raise MalformedInputFileError(f"{NEED_TAG}[{position}] is missing <{tag}>")
    text = " ".join("".join(child.itertext()).split())
    if not text:
        raise MalformedInputFileError(f"{NEED_TAG}[{position}] has an empty <{tag}>")
    return text


def parse_information_needs(xml_data: str | bytes) -> list[InformationNeed]:
    """Parse information-need XML.

    Pass raw bytes to let the XML declaration pick the encoding (e.g.
    ISO-8859-1); a `str` is taken as already decoded.

    Raises:
        MalformedInputFileError: If the XML is not well formed or not
            decodable, the root is not `<informationNeeds>`, an entry lacks
            `<identifier>` or `<text>`, or an identifier repeats.
    """
    try:
        root = ET.fromstring(xml_data)
    except (ET.ParseError, UnicodeDecodeError) as e:
        raise MalformedInputFileError(f"Invalid information-need XML: {e}") from e
    if root.tag != ROOT_TAG:
        raise MalformedInputFileError(f"Root element must be <{ROOT_TAG}>, got <{root.tag}>")

    needs: list[InformationNeed] = []
    seen: set[str] = set()
    for position, elem in enumerate(root.findall(NEED_TAG)):
        identifier = _child_text(elem, "identifier", position)
        if identifier in seen:
            raise MalformedInputFileError(f"Duplicate information-need identifier: {identifier}")
        seen.add(identifier)
        needs.append(InformationNeed(identifier=identifier, text=_child_text(elem, "text", position)))
    return needs


def load_information_needs(path: Path) -> list[InformationNeed]:
    """Read and parse the information-need file at `path`.

    The file is read as bytes so its XML declaration decides the encoding.
    """
    try:
        xml_data = path.read_bytes()
    except OSError as e:
        raise MalformedInputFileError(f"Cannot read information-need file {path}: {e}") from e
    return parse_information_needs(xml_data)
