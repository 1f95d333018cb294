from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from rich.console import Console
from rich.style import Style
from rich.text import Text

RENDER_WIDTH = 120

BLOCK_TAGS = {
    "article", "blockquote", "dd", "div", "dl", "dt", "figcaption", "figure",
    "footer", "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr", "ol", "p",
    "pre", "section", "table", "tr", "ul",
}
SKIPPED_TAGS = {"script", "style", "noscript"}
TAG_STYLES = {
    "b": Style(bold=True),
    "strong": Style(bold=True),
    "em": Style(italic=True),
    "i": Style(italic=True),
    "del": Style(strike=True),
    "s": Style(strike=True),
    "strike": Style(strike=True),
    "code": Style(color="yellow"),
    "pre": Style(color="yellow"),
}
IMAGE_STYLE = Style(italic=True)
LINK_STYLE = Style(color="cyan")
WHITESPACE = re.compile(r"\s+")


@dataclass
class RenderedEntry:
    lines: List[Text] = field(default_factory=list)
    links: List[str] = field(default_factory=list)

    @property
    def plain_lines(self) -> List[str]:
        return [line.plain for line in self.lines]


def render_entry(html: str, width: int = RENDER_WIDTH) -> RenderedEntry:
    """Render an entry body to wrapped, styled lines.

    Bold, italic, strikethrough and code keep their styles. Links are numbered
    after their text (``text [1]``) and listed with their targets at the end of
    the output.
    """
    if not html or not html.strip():
        return RenderedEntry()

    soup = BeautifulSoup(html, "lxml")
    text = Text()
    links: List[str] = []
    _render_node(soup, text, links, Style(), in_pre=False)

    lines = _wrap_lines(text, width)
    if links:
        lines.append(Text())
        lines.extend(
            Text(f"[{idx}] {url}", style=LINK_STYLE)
            for idx, url in enumerate(links, start=1)
        )
    return RenderedEntry(lines=lines, links=links)


def _render_node(node, out: Text, links: List[str], style: Style, in_pre: bool) -> None:
    if isinstance(node, NavigableString):
        # comments, doctypes and CDATA are NavigableString subclasses
        if type(node) is NavigableString:
            s = str(node) if in_pre else WHITESPACE.sub(" ", str(node))
            out.append(s, style=style or None)
        return
    if not isinstance(node, Tag) or node.name in SKIPPED_TAGS:
        return

    name = node.name
    if name == "br":
        out.append("\n")
        return
    if name == "img":
        alt = node.get("alt")
        out.append(f"[image: {alt}]" if alt else "[image]", style=style + IMAGE_STYLE)
        return

    block = name in BLOCK_TAGS
    if block:
        out.append("\n\n")
    if name == "li":
        out.append("\n• ")

    child_style = style + TAG_STYLES[name] if name in TAG_STYLES else style
    for child in node.children:
        _render_node(child, out, links, child_style, in_pre or name == "pre")

    if name == "a" and node.get("href"):
        links.append(node["href"])
        out.append(f" [{len(links)}]", style=style + LINK_STYLE)
    if block:
        out.append("\n\n")


def _wrap_lines(text: Text, width: int) -> List[Text]:
    console = Console(width=width)
    out: List[Text] = []
    for raw in text.split("\n", allow_blank=True):
        line = _strip(raw)
        if line is None:
            if out and out[-1].plain:
                out.append(Text())
            continue
        for wrapped in line.wrap(console, width):
            wrapped.rstrip()
            out.append(wrapped)
    while out and not out[-1].plain:
        out.pop()
    return out


def _strip(line: Text) -> Optional[Text]:
    plain = line.plain
    if not plain.strip():
        return None
    line = line[len(plain) - len(plain.lstrip()):]
    line.rstrip()
    return line
