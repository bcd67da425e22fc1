"""
QuickPaste Backend - Syntax Highlighter
========================================

What:  Renders paste content with 24-bit ANSI color escapes using Pygments.
How:   HighlightResources holds the syntax and theme tables, built once at
       startup; Highlighter.render() is a pure function of its arguments
       and those tables.
Who:   Built by build_context(); called by PasteService for GET /<id>/<lang>.

Rendering Pipeline:
    content ──▶ lexer.get_tokens()  (whole content, state carries across lines)
            ──▶ split tokens into lines
            ──▶ per line: TerminalTrueColorFormatter + line ending + RESET
            ──▶ concatenate

Fallbacks (never raised to the caller):
    unknown syntax hint  →  plain text lexer
    unknown theme name   →  configured default theme, then Pygments "default"
    bad line             →  the line exactly as it appears in the content
"""

import logging
import re
from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping, Optional, Tuple, Type

from pygments import format as format_tokens
from pygments.formatters import TerminalTrueColorFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_all_lexers, get_lexer_by_name
from pygments.style import Style
from pygments.styles import get_all_styles, get_style_by_name
from pygments.token import _TokenType
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

RESET = "\x1b[0m"

FALLBACK_THEME = "default"

# A line is its text plus the ending that terminated it; the last line may
# have no ending. "\r\n" is matched before the lone "\r" and "\n".
_LINE_PATTERN = re.compile(r"[^\r\n]*(?:\r\n|\r|\n)|[^\r\n]+")

# A plain extension: "*.rs" → "rs". Patterns with further wildcards are skipped.
_EXTENSION_PATTERN = re.compile(r"^\*\.([A-Za-z0-9_+\-]+)$")

TokenLine = List[Tuple[_TokenType, str]]


class HighlightResources:
    """
    Read-only syntax and theme tables.

    syntaxes: lowercase alias or file extension → canonical lexer alias
    themes:   style name → Pygments Style class

    Build once with `HighlightResources.load()` and share; nothing mutates
    the tables after construction.
    """

    def __init__(
        self,
        syntaxes: Mapping[str, str],
        themes: Mapping[str, Type[Style]],
        default_theme: str = FALLBACK_THEME,
    ):
        self.syntaxes: Mapping[str, str] = MappingProxyType(dict(syntaxes))
        self.themes: Mapping[str, Type[Style]] = MappingProxyType(dict(themes))
        if default_theme not in self.themes:
            logger.warning(
                "Default theme '%s' is not installed; using '%s'",
                default_theme,
                FALLBACK_THEME,
            )
            default_theme = FALLBACK_THEME
        self.default_theme = default_theme

    @classmethod
    def load(cls, default_theme: str = FALLBACK_THEME) -> "HighlightResources":
        """
        Build the tables from every lexer and style Pygments knows about.

        Aliases always win over extensions. Among lexers claiming the same
        extension, the first one Pygments lists keeps it.
        """
        aliases = {}
        extensions = {}
        for _name, lexer_aliases, filenames, _mimetypes in get_all_lexers():
            if not lexer_aliases:
                continue
            canonical = lexer_aliases[0]
            for alias in lexer_aliases:
                aliases.setdefault(alias.lower(), canonical)
            for pattern in filenames:
                match = _EXTENSION_PATTERN.match(pattern)
                if match:
                    extensions.setdefault(match.group(1).lower(), canonical)

        syntaxes = {**extensions, **aliases}

        themes = {}
        for style_name in get_all_styles():
            try:
                themes[style_name] = get_style_by_name(style_name)
            except ClassNotFound:
                logger.warning("Skipping unloadable Pygments style '%s'", style_name)

        logger.info(
            "Loaded %d syntax names and %d themes (default theme: %s)",
            len(syntaxes),
            len(themes),
            default_theme,
        )
        return cls(syntaxes=syntaxes, themes=themes, default_theme=default_theme)

    def lexer_for(self, syntax_hint: Optional[str]) -> Lexer:
        """
        A fresh lexer for `syntax_hint`, or a plain text lexer on no match.

        Lexers keep their input untouched: no newline stripping or adding.
        """
        options = {"stripnl": False, "ensurenl": False}
        canonical = self.syntaxes.get((syntax_hint or "").lower())
        if canonical is not None:
            try:
                return get_lexer_by_name(canonical, **options)
            except ClassNotFound:
                logger.warning("Lexer '%s' vanished after startup", canonical)
        return TextLexer(**options)

    def style_for(self, theme_name: Optional[str]) -> Type[Style]:
        """The style called `theme_name`, or the default theme on no match."""
        if theme_name and theme_name in self.themes:
            return self.themes[theme_name]
        return self.themes.get(self.default_theme) or get_style_by_name(FALLBACK_THEME)


class Highlighter:
    """Stateless renderer over a shared HighlightResources."""

    def __init__(self, resources: HighlightResources):
        self.resources = resources

    def render(
        self,
        content: str,
        syntax_hint: Optional[str],
        theme_name: Optional[str] = None,
    ) -> str:
        """
        Apply syntax coloring to `content`.

        Args:
            content:     Text to highlight, possibly multi-line.
            syntax_hint: Language alias or file extension, e.g. "py" or "rust".
            theme_name:  Pygments style name; None selects the default theme.

        Returns:
            The content with every successfully highlighted line wrapped in
            color escapes and terminated by RESET. Stripping the escapes
            gives back `content` exactly.
        """
        lexer = self.resources.lexer_for(syntax_hint)
        formatter = TerminalTrueColorFormatter(style=self.resources.style_for(theme_name))

        token_lines = _split_token_lines(lexer.get_tokens(content))
        return "".join(
            self._render_line(line, next(token_lines, None), formatter)
            for line in _LINE_PATTERN.findall(content)
        )

    @staticmethod
    def _render_line(
        line: str,
        tokens: Optional[TokenLine],
        formatter: TerminalTrueColorFormatter,
    ) -> str:
        """Highlight one line, or return it unmodified if that fails."""
        body = line.rstrip("\r\n")
        ending = line[len(body):]

        # Pygments normalizes line endings and drops a leading BOM, so the
        # token stream can drift from the original text. A line whose tokens
        # do not spell out its body is passed through as is.
        if tokens is None or "".join(value for _, value in tokens) != body:
            return line

        try:
            highlighted = format_tokens(tokens, formatter)
        except Exception as e:
            logger.debug("Highlighting failed for one line: %s", type(e).__name__)
            return line
        return highlighted + ending + RESET


def _split_token_lines(
    tokens: Iterable[Tuple[_TokenType, str]],
) -> Iterator[TokenLine]:
    """
    Regroup a token stream into one token list per line (newlines dropped).

    A token spanning several lines (e.g. a block comment) is cut at each
    newline; every piece keeps the token type.
    """
    line: TokenLine = []
    for token_type, value in tokens:
        *complete, rest = value.split("\n")
        for piece in complete:
            if piece:
                line.append((token_type, piece))
            yield line
            line = []
        if rest:
            line.append((token_type, rest))
    if line:
        yield line
