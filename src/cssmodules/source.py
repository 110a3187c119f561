# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Map tinycss2 token positions back to the text they were read from."""

import re

_NEWLINE_RE = re.compile(r"\r\n|[\r\f]")
_IDENT_RE = re.compile(
    r"(?:[\w-]|[^\x00-\x7f]|\\(?:[0-9a-fA-F]{1,6}[ \t\n]?|[^\n0-9a-fA-F]))+"
)


class SourceText:
    """Hold CSS text preprocessed the way the tinycss2 tokenizer sees it.

    Tokens carry 1-based ``source_line`` and ``source_column``; this class
    turns them into offsets so the exact spelling of a token can be kept.

    Args:
        text: Text handed to ``tinycss2.parse_component_value_list``.
    """

    def __init__(self, text: str) -> None:
        self.text = _NEWLINE_RE.sub("\n", text.replace("\0", "\ufffd"))
        self.line_starts = [0]
        self.line_starts.extend(match.end() for match in re.finditer("\n", self.text))

    def offset(self, token: object) -> int:
        return self.line_starts[token.source_line - 1] + token.source_column - 1

    def between(self, first: object, stop: object) -> str:
        """Return the text from ``first`` up to, not including, ``stop``."""
        return self.text[self.offset(first) : self.offset(stop)]

    def identifier_at(self, token: object) -> str | None:
        """Return the escaped spelling of the identifier starting at ``token``."""
        match = _IDENT_RE.match(self.text, self.offset(token))
        return match.group(0) if match else None
