"""
Input clean-up for text pasted from order pages and mail clients.
"""
import html
import re

_RE_BLOCK_BREAK = re.compile(r'(?i)<\s*br\s*/?>|</\s*(?:p|div|tr|li|h\d)\s*>')
_RE_CELL_BREAK = re.compile(r'(?i)</\s*t[dh]\s*>')
# Tag names must start with a letter and end at whitespace, '/' or '>',
# so "<jane@example.com>" survives.
_RE_TAG = re.compile(r'</?[a-zA-Z][a-zA-Z0-9]*(?:\s[^>]*)?/?>')
_RE_INLINE_SPACE = re.compile(r'[ \t\u00a0]+')


def normalize_pasted_text(value):
    """
    Normalize pasted page or email text while keeping its line structure.

    - Unifies line endings to "\\n"
    - Turns block-level HTML closers into line breaks, drops other tags
    - Unescapes HTML entities
    - Collapses runs of spaces/tabs/non-breaking spaces within a line
    """
    if not value:
        return ''
    text = value.replace('\r\n', '\n').replace('\r', '\n')
    text = _RE_BLOCK_BREAK.sub('\n', text)
    text = _RE_CELL_BREAK.sub(' ', text)
    text = _RE_TAG.sub('', text)
    text = html.unescape(text)
    return '\n'.join(_RE_INLINE_SPACE.sub(' ', line).rstrip() for line in text.split('\n'))
