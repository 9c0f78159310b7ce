"""Parse errors and Rust-style colored diagnostic rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",    # bold red
    Severity.WARNING: "\033[1;33m",  # bold yellow
    Severity.NOTE: "\033[1;36m",     # bold cyan
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class DiagnosticLabel:
    """Points at a codepoint offset within the parsed text."""

    offset: int
    message: str


@dataclass
class Diagnostic:
    """A single diagnostic message with optional labels and notes."""

    severity: Severity
    code: str
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


class DiagnosticRenderer:
    """Renders diagnostics in Rust-style format with colors."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(
        self,
        diag: Diagnostic,
        source: str | None = None,
        origin: str = "<input>",
        line: int = 1,
    ) -> str:
        lines: list[str] = []
        sev = diag.severity
        color = _COLORS[sev]

        # Header: error[E101]: message
        lines.append(
            f"{self._c(color)}{sev.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )

        for label in diag.labels:
            col = label.offset + 1
            lines.append(
                f"  {self._c(_BLUE)}-->{self._c(_RESET)} {origin}:{line}:{col}"
            )
            gutter = f"{line:>4}"
            lines.append(f"  {self._c(_BLUE)}   |{self._c(_RESET)}")

            if source is not None:
                lines.append(
                    f"  {self._c(_BLUE)}{gutter} |{self._c(_RESET)} {source}"
                )
                padding = " " * label.offset
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)} "
                    f"{padding}{self._c(color)}^{self._c(_RESET)}"
                )

            if label.message:
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)}   "
                    f"{self._c(color)}{label.message}{self._c(_RESET)}"
                )

        for note in diag.notes:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        return "\n".join(lines)


# ── Parse errors ─────────────────────────────────────────────────


def describe(ch: str | None) -> str:
    """Quote a lookahead character for messages; None is end of input."""
    if ch is None:
        return "end of input"
    return repr(ch)


class ParseError(Exception):
    """Fatal parse failure. Aborts the whole top-level parse."""

    code = "E100"

    def __init__(
        self,
        message: str,
        position: int,
        *,
        found: str | None = None,
        expected: str | None = None,
        operator: str | None = None,
        label: str = "",
        notes: list[str] | None = None,
    ) -> None:
        self.message = message
        self.position = position
        self.found = found
        self.expected = expected
        self.operator = operator
        self.diagnostic = Diagnostic(
            severity=Severity.ERROR,
            code=self.code,
            message=message,
            labels=[DiagnosticLabel(offset=position, message=label)],
            notes=notes or [],
        )
        super().__init__(f"{message} (at offset {position})")


class UnexpectedCharacter(ParseError):
    """Lookahead starts neither an atom nor a leading operator."""

    code = "E100"

    def __init__(self, found: str, position: int, *, context: str = "an expression") -> None:
        super().__init__(
            f"expected {context}, got {describe(found)}",
            position,
            found=found,
            label="unexpected character",
        )


class MissingOrMismatchedDelimiter(ParseError):
    """A mixfix operator's interior or closing symbol is not where it must be."""

    code = "E101"

    def __init__(self, expected: str, found: str, position: int, operator: str) -> None:
        super().__init__(
            f"expected {expected!r} in '{operator}', got {describe(found)}",
            position,
            found=found,
            expected=expected,
            operator=operator,
            label=f"expected {expected!r}",
        )


class UnexpectedEndOfInput(ParseError):
    """Input ran out while an operand or delimiter was still pending."""

    code = "E102"

    def __init__(
        self,
        position: int,
        *,
        expected: str | None = None,
        operator: str | None = None,
    ) -> None:
        if expected is not None and operator is not None:
            message = f"expected {expected!r} in '{operator}', got end of input"
            label = f"expected {expected!r}"
        else:
            message = "unexpected end of input, expected an expression"
            label = "input ends here"
        super().__init__(
            message,
            position,
            expected=expected,
            operator=operator,
            label=label,
        )


class NestingTooDeep(ParseError):
    """Operands nest deeper than the interpreter's recursion limit allows."""

    code = "E103"

    def __init__(self, position: int) -> None:
        super().__init__(
            "expression nested too deeply",
            position,
            label="nesting limit reached here",
        )


# ── Table and config errors ──────────────────────────────────────


class TableError(ValueError):
    """Malformed operator declaration."""

    code = "E300"


class ConfigError(Exception):
    """Unreadable or invalid bindpower.toml."""

    code = "E301"
