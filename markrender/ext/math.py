'''
# Math Extension

Recognises Latex math code:

* $...$ anywhere in a paragraph (inline math). The content may not contain '$' or a newline, and
  may not be empty. '$$' never starts an inline span, and a '$' preceded by a backslash is
  literal.

* A block consisting of a '$$' line, one or more lines of math, and a closing '$$' line (block
  math). The content may contain blank lines. Without a closing '$$', the text stays as it is.

Neither is typeset here. The extension only creates the tree elements:

    <span class="math math-inline">...</span>
    <div class="math math-block">...</div>

holding the (trimmed) math code as an opaque string. The renderer replaces their content with
placeholders, and the math substitution pass replaces those with the formatter's output.
'''

from ..lib import grammar
from . import util

import markdown

import re
from xml.etree import ElementTree


NAME = 'mr.math'

INLINE_MATH_RE = r'(?<![\\$])\$(?!\$)(?P<content>[^$\n]+?)(?<!\\)\$(?!\$)'

BLOCK_MATH_OPEN_RE = re.compile(r'^[ ]*\$\$[ \t]*(\n|$)')
BLOCK_MATH_CLOSE_RE = re.compile(r'(?m)^[ ]*\$\$[ \t]*$')

INLINE_CLASS = 'math math-inline'
BLOCK_CLASS = 'math math-block'


class InlineMathProcessor(markdown.inlinepatterns.InlineProcessor):
    def __init__(self, md):
        super().__init__(INLINE_MATH_RE, md)

    def handleMatch(self, match, data):
        content = match.group('content').strip()
        if not content:
            return None, None, None

        element = ElementTree.Element('span', {'class': INLINE_CLASS})
        element.text = markdown.util.AtomicString(content)
        util.set_raw(element, match.group(0))
        return element, match.start(0), match.end(0)


class BlockMathProcessor(markdown.blockprocessors.BlockProcessor):

    def test(self, parent, block):
        return BLOCK_MATH_OPEN_RE.match(block) is not None

    def run(self, parent, blocks):
        # The math may span several blocks (if it contains blank lines), so we look for the
        # closing '$$' without consuming anything until we've found it.
        opening, _, rest = blocks[0].partition('\n')
        text = rest
        n_blocks = 1

        while True:
            close = BLOCK_MATH_CLOSE_RE.search(text)
            if close:
                break
            if n_blocks >= len(blocks):
                return False  # Unterminated; let the paragraph processor have it.
            text += '\n\n' + blocks[n_blocks]
            n_blocks += 1

        content = text[:close.start()].strip()
        if not content:
            return False

        remainder = text[close.end():].lstrip('\n')
        raw = f'{opening}\n{text[:close.end()]}'
        del blocks[:n_blocks]
        if remainder:
            blocks.insert(0, remainder)

        element = ElementTree.SubElement(parent, 'div', {'class': BLOCK_CLASS})
        element.text = markdown.util.AtomicString(content)
        util.set_raw(element, raw)


class MathExtension(markdown.Extension):
    def extendMarkdown(self, md):
        if '$' not in md.ESCAPED_CHARS:
            md.ESCAPED_CHARS.append('$')

        md.inlinePatterns.register(
            InlineMathProcessor(md), 'mr-math-inline', grammar.priority('mr-math-inline'))
        md.parser.blockprocessors.register(
            BlockMathProcessor(md.parser), 'mr-block-math', grammar.priority('mr-block-math'))


def makeExtension(**kwargs):
    return MathExtension(**kwargs)
