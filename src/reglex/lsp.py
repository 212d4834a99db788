"""Minimal LSP server for .reg files: semantic tokens and folding ranges."""

from __future__ import annotations

import logging

from lsprotocol.types import (
    TEXT_DOCUMENT_FOLDING_RANGE,
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
    FoldingRange,
    FoldingRangeKind,
    FoldingRangeParams,
    SemanticTokens,
    SemanticTokensLegend,
    SemanticTokensParams,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from reglex.api import RegistryLexer
from reglex.document import Document
from reglex.folder import fold_ranges
from reglex.options import RegistryOptions
from reglex.tokens import Style

logger = logging.getLogger(__name__)

TOKEN_TYPES = [
    "comment",
    "property",
    "string",
    "number",
    "type",
    "namespace",
    "regexp",
    "enumMember",
    "parameter",
    "operator",
]
TOKEN_MODIFIERS = ["deprecated"]

# Style -> (token type, modifier bits). DEFAULT is never reported.
_SEMANTIC: dict[Style, tuple[int, int]] = {
    Style.COMMENT: (TOKEN_TYPES.index("comment"), 0),
    Style.VALUENAME: (TOKEN_TYPES.index("property"), 0),
    Style.STRING: (TOKEN_TYPES.index("string"), 0),
    Style.HEXDIGIT: (TOKEN_TYPES.index("number"), 0),
    Style.VALUETYPE: (TOKEN_TYPES.index("type"), 0),
    Style.ADDEDKEY: (TOKEN_TYPES.index("namespace"), 0),
    Style.DELETEDKEY: (TOKEN_TYPES.index("namespace"), 1),
    Style.ESCAPED: (TOKEN_TYPES.index("regexp"), 0),
    Style.KEYPATH_GUID: (TOKEN_TYPES.index("enumMember"), 0),
    Style.STRING_GUID: (TOKEN_TYPES.index("enumMember"), 0),
    Style.PARAMETER: (TOKEN_TYPES.index("parameter"), 0),
    Style.OPERATOR: (TOKEN_TYPES.index("operator"), 0),
}

LEGEND = SemanticTokensLegend(token_types=TOKEN_TYPES, token_modifiers=TOKEN_MODIFIERS)

server = LanguageServer("reglex-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full)


def _utf16_len(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def _styled(source: str, *, fold: bool = False) -> Document:
    doc = Document(source)
    RegistryLexer(RegistryOptions(fold=fold, fold_compact=fold)).colourise(doc)
    return doc


def encode_semantic_tokens(doc: Document) -> list[int]:
    """Encode styled runs as LSP relative token data, one run per line piece.

    Runs that cross a line break are split; line terminators are dropped.
    Columns and lengths are in UTF-16 code units.
    """
    data: list[int] = []
    prev_line = 0
    prev_col = 0
    text = doc.text
    for line in range(doc.line_count):
        start = doc.line_start(line)
        end = doc.line_start(line + 1)
        while end > start and text[end - 1] in "\r\n":
            end -= 1
        col = 0
        pos = start
        while pos < end:
            style = doc.style_at(pos)
            run_end = pos + 1
            while run_end < end and doc.style_at(run_end) == style:
                run_end += 1
            length = _utf16_len(text[pos:run_end])
            semantic = _SEMANTIC.get(style)
            if semantic is not None:
                delta_line = line - prev_line
                delta_col = col - prev_col if delta_line == 0 else col
                data.extend([delta_line, delta_col, length, semantic[0], semantic[1]])
                prev_line = line
                prev_col = col
            col += length
            pos = run_end
    return data


def _semantic_tokens(ls: LanguageServer, uri: str) -> SemanticTokens:
    source = ls.workspace.get_text_document(uri).source
    doc = _styled(source)
    data = encode_semantic_tokens(doc)
    logger.debug("%s: %d semantic tokens", uri, len(data) // 5)
    return SemanticTokens(data=data)


def _folding_ranges(ls: LanguageServer, uri: str) -> list[FoldingRange]:
    source = ls.workspace.get_text_document(uri).source
    doc = _styled(source, fold=True)
    return [
        FoldingRange(start_line=start, end_line=end, kind=FoldingRangeKind.Region)
        for start, end in fold_ranges(doc)
    ]


@server.feature(TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, LEGEND)
def semantic_tokens_full(ls: LanguageServer, params: SemanticTokensParams) -> SemanticTokens:
    return _semantic_tokens(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_FOLDING_RANGE)
def folding_range(ls: LanguageServer, params: FoldingRangeParams) -> list[FoldingRange]:
    return _folding_ranges(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
