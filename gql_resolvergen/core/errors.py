"""Exceptions and diagnostics raised while translating a schema."""

from dataclasses import dataclass

MALFORMED_SELECTION = "malformed-selection"
AMBIGUOUS_REPRESENTATION = "ambiguous-representation"


@dataclass(frozen=True)
class Diagnostic:
    """A single translation problem, located by type, field and selection."""
    kind: str
    message: str
    type_name: str | None = None
    field_name: str | None = None
    selection: str | None = None

    @property
    def location(self) -> str:
        if self.type_name and self.field_name:
            return f"{self.type_name}.{self.field_name}"
        return self.type_name or "<document>"

    def __str__(self) -> str:
        text = f"{self.location}: {self.message}"
        if self.selection is not None:
            text += f' (selection "{self.selection}")'
        return text


class TranslationError(Exception):
    """Exception raised when a schema cannot be translated.

    Carries every diagnostic collected for the document, not only the
    first one.
    """

    kind = "translation"

    def __init__(self, message: str, diagnostics: list[Diagnostic] | None = None):
        self.message = message
        self.diagnostics = diagnostics if diagnostics is not None else []
        super().__init__(message)

    @classmethod
    def for_selection(
        cls,
        message: str,
        type_name: str,
        selection: str,
        field_name: str | None = None,
    ) -> "TranslationError":
        diagnostic = Diagnostic(
            kind=cls.kind,
            message=message,
            type_name=type_name,
            field_name=field_name,
            selection=selection,
        )
        return cls(str(diagnostic), [diagnostic])

    def __str__(self) -> str:
        if len(self.diagnostics) <= 1:
            return self.message
        lines = [self.message]
        lines.extend(f"  - {d}" for d in self.diagnostics)
        return "\n".join(lines)


class SelectionError(TranslationError):
    """A key, provides or requires selection names a field that does not exist."""

    kind = MALFORMED_SELECTION


class RepresentationError(TranslationError):
    """A selected field cannot be rendered as part of a representation shape."""

    kind = AMBIGUOUS_REPRESENTATION


class ConfigError(Exception):
    """Raised for unreadable or invalid configuration files."""
