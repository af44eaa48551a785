'''
The math substitution pass: the last step of rendering, replacing math in the rendered HTML with
the math formatter's output.

Math recognised by the grammar rules (or written as a math code block) reaches this pass as
placeholders, one per expression, and each is replaced exactly. Math found only by pattern in
plain text is located by matching its delimited, HTML-escaped form instead. In both cases, block
expressions go first, so that an inline pattern can never match inside a block expression.

Formatter failures are reported as warnings. The math then stays in the output as its literal
delimited text. This pass never raises.
'''

from __future__ import annotations
from .document import MathExpression
from .progress import Progress
from ..ext import util

import html
import re
from typing import Callable, Dict, Optional, Sequence


NAME = 'math'  # For progress/error messages

MATH_PLACEHOLDER_RE = util.placeholder_re('math')

MathFormatterFn = Callable[[str, bool], str]


def delimited(expression: MathExpression) -> str:
    '''The expression as it would be written in Markdown.'''
    if expression.display_mode:
        return f'$${expression.content}$$'
    return f'${expression.content}$'


def _leftover_patterns(expression: MathExpression):
    escaped = html.escape(expression.content, quote = False)
    body = re.escape(escaped)

    if expression.display_mode:
        yield re.compile(rf'\$\$\s*{body}\s*\$\$')
        normalised = re.sub(r'\s+', ' ', escaped)
        if normalised != escaped:
            # Newlines in the content may have been reflowed.
            flexible = r'\s+'.join(re.escape(word) for word in normalised.split(' '))
            yield re.compile(rf'\$\$\s*{flexible}\s*\$\$')
    else:
        yield re.compile(rf'(?<!\$)\${body}\$(?!\$)')


class MathSubstituter:
    def __init__(self, formatter: MathFormatterFn, progress: Optional[Progress] = None):
        self.formatter = formatter
        self.progress = progress or Progress()


    def _format(self, expression: MathExpression) -> Optional[str]:
        try:
            return self.formatter(expression.content, expression.display_mode)
        except Exception as e:
            self.progress.warning(
                NAME, msg = f'Could not format math "{delimited(expression)}": {e}')
            return None


    def substitute(self, html_text: str, expressions: Sequence[MathExpression]) -> str:
        indexed = list(enumerate(expressions))
        ordered = ([(i, e) for i, e in indexed if e.display_mode] +
                   [(i, e) for i, e in indexed if not e.display_mode])

        placeholders: Dict[int, str] = {}
        for index, expression in ordered:
            markup = self._format(expression)

            if expression.path is not None:
                if markup is None:
                    markup = html.escape(delimited(expression), quote = False)
                placeholders[index] = markup
                continue

            if markup is None:
                continue

            for pattern in _leftover_patterns(expression):
                html_text, count = pattern.subn(lambda _: markup, html_text)
                if count:
                    break

        if not placeholders:
            return html_text

        return MATH_PLACEHOLDER_RE.sub(
            lambda m: placeholders.get(int(m.group('id')), m.group(0)),
            html_text)
