"""
Error handling for the Farpy lexer.

Provides the diagnostic model shared by the lexer and the parser: a
classified message attached to a SourceSpan, rendered as a caret-annotated
excerpt of the offending line.
"""

from typing import Optional, List
from dataclasses import dataclass

from colorama import Fore, Style

from .tokens import SourceSpan


@dataclass
class Diagnostic:
    """A single error/warning attached to a span of source text."""
    message: str
    span: SourceSpan
    severity: str = "error"  # "error", "warning"
    phase: str = "lexer"     # "lexer", "parser"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    @property
    def label(self) -> str:
        """Classification label, e.g. "lexer error"."""
        return f"{self.phase} {self.severity}"

    def render(self, colored: bool = False) -> str:
        """
        Render the diagnostic with the source line and a caret underline.

        Example::

            lexer error: Unknown character '@' [L001]
            ---> main.fp:1:4
               |
             1 |    x = @
               |        ^ Unknown character '@'
               |
        """
        def paint(text: str, *styles: str) -> str:
            if not colored or not text:
                return text
            return "".join(styles) + text + Style.RESET_ALL

        span = self.span
        line_number = str(span.line)
        gutter = " " * (len(line_number) + 2)
        carets = "^" * max(1, span.width)
        # Tabs are kept so the carets line up with the echoed source line.
        padding = "".join(
            "\t" if char == "\t" else " " for char in span.line_content[:span.start_column]
        ).ljust(span.start_column)

        header = paint(f"{self.label}: ", Style.BRIGHT, Fore.RED) + paint(self.message, Fore.RED)
        if self.code:
            header += paint(f" [{self.code}]", Style.DIM)

        lines = [
            header,
            paint(f"---> {span.filename}:{span.line}:{span.start_column}", Style.BRIGHT),
            paint(f"{gutter}|", Style.BRIGHT, Fore.BLUE),
            paint(f" {line_number} |", Style.BRIGHT, Fore.BLUE) + "    " + span.line_content,
            paint(f"{gutter}|", Style.BRIGHT, Fore.BLUE) + "    " + padding
            + paint(f"{carets} {self.message}", Style.BRIGHT, Fore.RED),
            paint(f"{gutter}|", Style.BRIGHT, Fore.BLUE),
        ]

        if self.help_text:
            lines.append(f"  help: {self.help_text}")

        if self.suggestions:
            for suggestion in self.suggestions:
                lines.append(f"    - {suggestion}")

        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render(colored=False)


class FarpyError(Exception):
    """
    Base class for fatal front-end errors.

    Carries a Diagnostic; the driver decides whether to print it and stop.
    """

    phase = "lexer"

    def __init__(
        self,
        message: str,
        span: SourceSpan,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            span=span,
            severity="error",
            phase=self.phase,
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def span(self) -> SourceSpan:
        return self.diagnostic.span

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def render(self, colored: bool = False) -> str:
        return self.diagnostic.render(colored=colored)

    def __str__(self) -> str:
        return str(self.diagnostic)


class LexerError(FarpyError):
    """Raised when the lexer hits an unknown character or an unterminated string."""

    phase = "lexer"


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Unknown character",
    "L002": "Unterminated string literal",
}


def create_unknown_character_error(char: str, span: SourceSpan) -> LexerError:
    """Create an error for a character that starts no token."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in Farpy source code."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"Unknown character '{char}'" if char.isprintable() else "Unknown character",
        span=span,
        code="L001",
        help_text=help_text,
    )


def create_unterminated_string_error(span: SourceSpan) -> LexerError:
    """Create an error for a string literal that reaches end of input."""
    return LexerError(
        message=f"Unterminated string literal starting on line {span.line}",
        span=span,
        code="L002",
        help_text='String literals must be closed with a matching " quote.',
        suggestions=['Add a closing " quote'],
    )
