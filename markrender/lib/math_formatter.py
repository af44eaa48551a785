'''
The default math formatter: Latex math code in, MathML out (rendered natively by the browser).

Any callable with the same signature can be used instead; see MarkdownRenderer(math_formatter=...).
'''

import latex2mathml.converter


class MathFormatter:
    def __call__(self, expression: str, display_mode: bool) -> str:
        return latex2mathml.converter.convert(expression,
                                              display = 'block' if display_mode else 'inline')
