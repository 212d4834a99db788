"""HTML renderer: a styled Document as a highlighted <pre> block."""

from __future__ import annotations

import html

from reglex.document import Document
from reglex.tokens import Style

STYLE_CLASSES: dict[Style, str] = {
    Style.COMMENT: "reg-comment",
    Style.VALUENAME: "reg-valuename",
    Style.STRING: "reg-string",
    Style.HEXDIGIT: "reg-hexdigit",
    Style.VALUETYPE: "reg-valuetype",
    Style.ADDEDKEY: "reg-addedkey",
    Style.DELETEDKEY: "reg-deletedkey",
    Style.ESCAPED: "reg-escaped",
    Style.KEYPATH_GUID: "reg-keypath-guid",
    Style.STRING_GUID: "reg-string-guid",
    Style.PARAMETER: "reg-parameter",
    Style.OPERATOR: "reg-operator",
}


def render_html(doc: Document) -> str:
    """Render the stored styles of doc. Unstyled (DEFAULT) text is emitted bare."""
    parts: list[str] = ['<pre class="reglex">']
    for token in doc.tokens():
        text = _escape_html(token.text)
        css = STYLE_CLASSES.get(token.style)
        if css is None:
            parts.append(text)
        else:
            parts.append(f'<span class="{css}">{text}</span>')
    parts.append("</pre>\n")
    return "".join(parts)


def _escape_html(text: str) -> str:
    """Escape markup characters and write non-ASCII as hex character references."""
    escaped = html.escape(text, quote=False)
    return "".join(ch if ord(ch) <= 0x7F else f"&#x{ord(ch):X};" for ch in escaped)
