# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Error taxonomy for stylesheet localization."""

_IDENTIFIER_HELP_URL = "https://stackoverflow.com/a/449000/5576420"


class LocalizeError(RuntimeError):
    """Represent localization-phase failure."""


class PathError(LocalizeError):
    """Represent a stylesheet source path that is not absolute."""


class CssSyntaxError(LocalizeError):
    """Represent CSS text that cannot be turned into a stylesheet tree."""


class MalformedComposesError(LocalizeError):
    """Represent an invalid ``composes`` declaration."""


class NamingError(LocalizeError):
    """Represent a generated name rejected by identifier validation.

    Args:
        symbol: Original class or keyframe name.
        kind: ``class`` or ``keyframe``.
        file_path: Stylesheet the symbol was declared in.
        candidate: Rejected generated name.
        reason: Optional extra detail appended to the message.
    """

    def __init__(
        self,
        symbol: str,
        kind: str,
        file_path: str,
        candidate: str,
        reason: str | None = None,
    ) -> None:
        message = (
            f'Wrong generated name for {kind} "{symbol}" in {file_path}\n'
            f'Got: "{candidate}"'
        )
        if reason is not None:
            message = f"{message}\n{reason}"
        else:
            message = f"{message}\nLook at {_IDENTIFIER_HELP_URL}"
        super().__init__(message)
        self.symbol = symbol
        self.kind = kind
        self.file_path = file_path
        self.candidate = candidate
