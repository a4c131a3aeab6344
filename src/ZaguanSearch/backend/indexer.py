"""Build the Whoosh index from Dublin Core XML records.

Every `*.xml` file under the documents directory is one record. Elements are
matched by local name (namespace prefixes such as `dc:` are ignored), so both
plain and OAI-DC records work.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path

from whoosh import index

from ZaguanSearch.backend.schema import PATH_FIELD, build_schema
from ZaguanSearch.core.query import FieldName
from ZaguanSearch.utils.log import log

_RE_YEAR = re.compile(r"\d{4}")
_FIELD_NAMES = frozenset(f.value for f in FieldName)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1].split(":")[-1]


def parse_record(path: Path) -> dict[str, str]:
    """Extract schema fields from one XML record.

    Repeated elements are joined with newlines (spaces for keyword fields);
    `date` is reduced to its first four-digit year.

    Raises:
        ET.ParseError: If the file is not well-formed XML.
    """
    root = ET.parse(path).getroot()
    values: dict[str, list[str]] = {}
    for elem in root.iter():
        name = _local_name(elem.tag)
        if name not in _FIELD_NAMES:
            continue
        text = " ".join("".join(elem.itertext()).split())
        if text:
            values.setdefault(name, []).append(text)

    doc: dict[str, str] = {PATH_FIELD: str(path)}
    for name, items in values.items():
        if name == FieldName.DATE.value:
            match = _RE_YEAR.search(" ".join(items))
            if match:
                doc[name] = match.group(0)
        elif name in (FieldName.TYPE.value, FieldName.LANGUAGE.value):
            doc[name] = " ".join(items)
        else:
            doc[name] = "\n".join(items)
    return doc


def build_index(docs_dir: Path, index_dir: Path) -> int:
    """(Re)create the index in `index_dir` from the records in `docs_dir`.

    Args:
        docs_dir: Directory searched recursively for `*.xml` records.
        index_dir: Target index directory; created if missing.

    Returns:
        Number of indexed documents.
    """
    index_dir.mkdir(parents=True, exist_ok=True)
    ix = index.create_in(str(index_dir), build_schema())
    writer = ix.writer()
    count = 0
    try:
        for path in sorted(docs_dir.rglob("*.xml")):
            try:
                doc = parse_record(path)
            except ET.ParseError as e:
                log.warning("Skipping unparseable record %s: %s", path, e)
                continue
            writer.add_document(**doc)
            count += 1
            log.debug("Indexed %s", path)
        writer.commit()
    except Exception:
        writer.cancel()
        raise
    finally:
        ix.close()
    log.info("Indexed %d documents into %s", count, index_dir)
    return count

