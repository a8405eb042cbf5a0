"""
Syntax highlighting of instruction text using Pygments.
"""

import curses
from typing import Any, Dict, Final, List, Tuple

from pygments.lexers.asm import GasLexer, NasmLexer
from pygments.token import Token

SYNTAX_COLORS: Final[Dict[str, int]] = {
    'mnemonic': 11,    # Cyan
    'register': 12,    # Yellow
    'number': 13,      # Red
    'size': 14,        # Magenta
    'operator': 15,    # White
    'comment': 16,     # Green
    'default': 0,      # Default
}

TOKEN_COLOR_MAP: Final[Dict[Any, int]] = {
    Token.Name.Function: SYNTAX_COLORS['mnemonic'],
    Token.Keyword: SYNTAX_COLORS['mnemonic'],

    Token.Name.Builtin: SYNTAX_COLORS['register'],
    Token.Name.Variable: SYNTAX_COLORS['register'],

    Token.Number: SYNTAX_COLORS['number'],
    Token.Number.Hex: SYNTAX_COLORS['number'],
    Token.Number.Integer: SYNTAX_COLORS['number'],
    Token.Number.Float: SYNTAX_COLORS['number'],

    Token.Keyword.Type: SYNTAX_COLORS['size'],

    Token.Operator: SYNTAX_COLORS['operator'],
    Token.Punctuation: SYNTAX_COLORS['operator'],

    Token.Comment: SYNTAX_COLORS['comment'],

    Token.Text: SYNTAX_COLORS['default'],
    Token.Text.Whitespace: SYNTAX_COLORS['default'],
}


class SyntaxHighlighter:
    """Splits a line of instruction text into colored segments."""

    def __init__(self, syntax: str = 'intel') -> None:
        self.lexer = GasLexer(ensurenl=False) if syntax == 'att' else NasmLexer(ensurenl=False)
        self.color_pairs_initialized = False

    def init_colors(self) -> None:
        """Initialize color pairs for syntax highlighting."""

        if self.color_pairs_initialized:
            return

        curses.init_pair(SYNTAX_COLORS['mnemonic'], curses.COLOR_CYAN, -1)
        curses.init_pair(SYNTAX_COLORS['register'], curses.COLOR_YELLOW, -1)
        curses.init_pair(SYNTAX_COLORS['number'], curses.COLOR_RED, -1)
        curses.init_pair(SYNTAX_COLORS['size'], curses.COLOR_MAGENTA, -1)
        curses.init_pair(SYNTAX_COLORS['operator'], curses.COLOR_WHITE, -1)
        curses.init_pair(SYNTAX_COLORS['comment'], curses.COLOR_GREEN, -1)

        self.color_pairs_initialized = True

    def tokenize(self, line: str) -> List[Tuple[str, int]]:
        """
        Split a line into (text, color pair number) segments.

        Args:
            line: Instruction text

        Returns:
            Segments whose texts concatenate back to the line
        """

        if not line:
            return []

        result = []
        for token_type, text in self.lexer.get_tokens(line):
            if not text:
                continue
            result.append((text, self._get_token_color(token_type)))

        return result

    def highlight_line(self, line: str) -> List[Tuple[str, int]]:
        """
        Highlight a line of instruction text.

        Args:
            line: Instruction text

        Returns:
            A list of (text, curses attribute) tuples
        """

        if not line:
            return [(line, curses.color_pair(0))]

        return [(text, curses.color_pair(color)) for text, color in self.tokenize(line)]

    def _get_token_color(self, token_type: Any) -> int:
        """
        Get the color pair number for a token type.

        Args:
            token_type: The Pygments token type

        Returns:
            The color pair number
        """

        if token_type in TOKEN_COLOR_MAP:
            return TOKEN_COLOR_MAP[token_type]

        while token_type.parent:
            token_type = token_type.parent
            if token_type in TOKEN_COLOR_MAP:
                return TOKEN_COLOR_MAP[token_type]

        return SYNTAX_COLORS['default']
