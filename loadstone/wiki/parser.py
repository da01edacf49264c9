"""Wiki article HTML to an ordered ``{section title: text}`` mapping."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, NavigableString, Tag

SUMMARY_SECTION = "Summary"
BULLET = "•"

# Removed before any text is read. These carry navigation and UI chrome only.
NOISE_SELECTORS = (
    "style",
    "script",
    "noscript",
    ".navbox",
    ".mw-editsection",
    ".magnify",
)

_EDIT_LINK_RE = re.compile(r"\s*\[\s*edit(?:\s*\|\s*edit source)?\s*\]", re.IGNORECASE)
_HEADING_TAGS = {"h2": 2, "h3": 3, "h4": 4}
_WS_RE = re.compile(r"\s+")


def clean_heading(text: str) -> str:
    """Strip ``[edit]`` / ``[edit | edit source]`` remnants from a heading."""
    return _EDIT_LINK_RE.sub("", text).strip()


def _heading_level(node: Tag) -> int | None:
    if node.name in _HEADING_TAGS:
        return _HEADING_TAGS[node.name]
    # MediaWiki 1.43+ wraps headings: <div class="mw-heading mw-heading2"><h2>..</h2></div>
    if node.name == "div" and "mw-heading" in (node.get("class") or []):
        inner = node.find(list(_HEADING_TAGS), recursive=False)
        if inner is not None:
            return _HEADING_TAGS[inner.name]
    return None


def _table_text(table: Tag) -> str:
    rows = []
    for tr in table.find_all("tr"):
        cells = [_WS_RE.sub(" ", cell.get_text()).strip() for cell in tr.find_all(["th", "td"])]
        if cells:
            rows.append(" | ".join(cells))
    if not rows:
        return ""
    return "\n" + "\n".join(rows)


def _list_text(node: Tag) -> str:
    items = [f"{BULLET} {li.get_text().strip()}" for li in node.find_all("li", recursive=False)]
    if not items:
        return ""
    return "\n" + "\n".join(items)


def _node_text(node: Tag) -> str:
    if node.name == "table":
        return _table_text(node)
    if node.name in ("ul", "ol"):
        return _list_text(node)
    return node.get_text().strip()


def parse_wiki_content(html: str) -> dict[str, str]:
    """Split rendered article HTML into sections at level-2 headings.

    Content before the first ``h2`` is collected under ``"Summary"``. ``h3``
    and ``h4`` headings stay inside the current section as ``=== name ===``
    lines. Tables become ``a | b`` rows and lists become bulleted lines.
    Sections whose text is empty are left out, so an empty document yields
    ``{}``.
    """
    soup = BeautifulSoup(html, "html.parser")
    for el in soup.select(", ".join(NOISE_SELECTORS)):
        el.decompose()

    root = soup.select_one(".mw-parser-output") or soup.body or soup

    sections: dict[str, str] = {}
    current = SUMMARY_SECTION
    buffer: list[str] = []

    def flush() -> None:
        text = "\n".join(buffer).strip()
        if not text:
            return
        if current in sections:
            sections[current] = f"{sections[current]}\n\n{text}"
        else:
            sections[current] = text

    for node in root.children:
        if isinstance(node, Tag):
            level = _heading_level(node)
            if level == 2:
                flush()
                current = clean_heading(node.get_text())
                buffer = []
            elif level is not None:
                buffer.append(f"\n=== {clean_heading(node.get_text())} ===")
            else:
                text = _node_text(node)
                if text:
                    buffer.append(text)
        elif type(node) is NavigableString:
            # bare text only; comments and doctypes are NavigableString subclasses
            text = node.strip()
            if text:
                buffer.append(text)

    flush()
    return sections
