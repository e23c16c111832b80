"""Errors raised by the content core"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParseDiagnostic:
    """A recoverable problem found while parsing; line is 1-based."""
    line: int
    message: str

    def __str__(self) -> str:
        return f"line {self.line}: {self.message}"


class MissingRequiredFieldError(ValueError):
    """A post was built without one or more of its required fields."""

    def __init__(self, fields: list[str]):
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")


class MarkdownSyntaxError(ValueError):
    """Raised by the strict parser; carries every diagnostic found in the input."""

    def __init__(self, diagnostics: list[ParseDiagnostic]):
        self.diagnostics = list(diagnostics)
        detail = "; ".join(str(d) for d in self.diagnostics)
        super().__init__(f"{len(self.diagnostics)} markdown problem(s): {detail}")


class InvalidPostError(ValueError):
    """A post failed validation and was not stored."""

    def __init__(self, slug: str, errors: list[str]):
        self.slug = slug
        self.errors = list(errors)
        super().__init__(f"Invalid post {slug}: {'; '.join(self.errors)}")
