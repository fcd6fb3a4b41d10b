"""Pygments syntax highlighting for code blocks"""

from typing import Optional

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound


HIGHLIGHT_CLASS = 'highlight'


def highlight_code(code: str, lang: Optional[str], detect: bool = True) -> Optional[tuple[str, str]]:
    """Return (markup, language alias) for code, or None when no lexer applies.

    A declared but unknown language is ignored rather than treated as an error.
    """
    try:
        if lang:
            lexer = get_lexer_by_name(lang)
        elif detect and code.strip():
            lexer = guess_lexer(code)
        else:
            return None
    except ClassNotFound:
        return None
    alias = lexer.aliases[0] if lexer.aliases else lexer.name.lower()
    if alias == 'text':
        return None
    return highlight(code, lexer, HtmlFormatter(nowrap=True)), alias
