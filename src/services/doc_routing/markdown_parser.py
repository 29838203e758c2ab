"""
Markdown front-matter parsing.

Documents may start with a ``---`` delimited block of ``key: value`` lines.
Only flat scalar values are supported; that is all the bundled docs use.
"""

import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Dict, Optional

FRONT_MATTER_PATTERN = re.compile(r"\A\s*---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)

# Description lookup only scans the head of the document
DESCRIPTION_SCAN_LINES = 20


@dataclass
class ParsedDocument:
    doc_id: str
    name: str
    description: str
    metadata: Dict[str, str] = field(default_factory=dict)
    body: str = ""


def _strip_quotes(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value.strip("\"'")


class MarkdownParser:
    """Extracts metadata from markdown documents."""

    def extract_front_matter(self, content: str) -> Dict[str, str]:
        """Return front-matter keys (lower-cased) and values, or {} if absent."""
        result: Dict[str, str] = {}
        match = FRONT_MATTER_PATTERN.match(content or "")
        if not match:
            return result

        for line in match.group(1).splitlines():
            key, sep, value = line.partition(":")
            if not sep or not key.strip():
                continue
            result[key.strip().lower()] = _strip_quotes(value)
        return result

    def extract_description(self, doc_id: str, content: Optional[str]) -> str:
        """
        Return the ``description:`` value from the first lines of the document.

        Falls back to ``doc_id`` when the document has no front matter, the
        block is not closed within the scanned lines, or the field is empty.
        """
        if not content or not content.lstrip().startswith("---"):
            return doc_id

        started = False
        for line in content.splitlines()[:DESCRIPTION_SCAN_LINES]:
            stripped = line.strip()
            if stripped == "---":
                if started:
                    break
                started = True
                continue
            if started and stripped.lower().startswith("description:"):
                description = _strip_quotes(stripped[len("description:"):])
                return description or doc_id
        return doc_id

    def remove_front_matter(self, content: str) -> str:
        return FRONT_MATTER_PATTERN.sub("", content or "", count=1)

    def parse_document(self, doc_id: str, content: str) -> ParsedDocument:
        """Front matter, name (file stem by default), description and body of a document."""
        metadata = self.extract_front_matter(content)
        return ParsedDocument(
            doc_id=doc_id,
            name=metadata.get("name") or PurePosixPath(doc_id).stem,
            description=self.extract_description(doc_id, content),
            metadata=metadata,
            body=self.remove_front_matter(content),
        )
