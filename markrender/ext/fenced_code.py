'''
# Fenced Code Extension

Recognises ```lang ... ``` (and ~~~lang ... ~~~) blocks, and turns each one into a
<pre><code class="language-lang"> element in the document tree.

Python Markdown's own fenced_code extension converts fences straight to HTML during
preprocessing, which hides them from everything that runs on the tree (the annotator needs to see
every code block and its language). Here, the preprocessor only stashes the code and leaves a
one-line placeholder behind; the block processor then turns the placeholder into a tree element.

Fences may be indented, or prefixed with '>' (inside block quotes). The same prefix is removed
from each line of the code. An unterminated fence is left alone, and ends up as paragraph text.
'''

from ..lib import grammar
from . import util

import markdown

import re
from xml.etree import ElementTree


NAME = 'mr.fenced_code'

FENCE_RE = re.compile(r'''(?xms)
    ^(?P<prefix>[ \t>]*)
    (?P<fence>`{3,}|~{3,})
    [ \t]*
    (?P<lang>[\w#.+-]*)
    [^\n`]*\n
    (?P<code>.*?)
    ^[ \t>]*(?P=fence)[ \t]*$
''')

PLACEHOLDER_RE = util.placeholder_re('fence')


class FencedCodePreprocessor(markdown.preprocessors.Preprocessor):
    def __init__(self, md, stash: list):
        super().__init__(md)
        self.stash = stash

    def _replace(self, match):
        prefix = match.group('prefix')
        raw = match.group(0)
        code_lines = match.group('code').split('\n')
        if code_lines and code_lines[-1] == '':
            code_lines.pop()

        bare_prefix = prefix.rstrip()
        code = '\n'.join(
            line[len(prefix):] if line.startswith(prefix)
            else line[len(bare_prefix):] if bare_prefix and line.startswith(bare_prefix)
            else line
            for line in code_lines
        )

        index = len(self.stash)
        self.stash.append((match.group('lang'), code, raw))
        return f'{bare_prefix}\n{prefix}{util.placeholder("fence", index)}\n{bare_prefix}\n'

    def run(self, lines):
        text = '\n'.join(lines)
        return FENCE_RE.sub(self._replace, text).split('\n')


class FencedCodeBlockProcessor(markdown.blockprocessors.BlockProcessor):
    def __init__(self, parser, stash: list):
        super().__init__(parser)
        self.stash = stash

    def test(self, parent, block):
        return PLACEHOLDER_RE.fullmatch(block.strip()) is not None

    def run(self, parent, blocks):
        match = PLACEHOLDER_RE.fullmatch(blocks.pop(0).strip())
        lang, code, raw = self.stash[int(match.group('id'))]

        pre = ElementTree.SubElement(parent, 'pre')
        util.set_raw(pre, raw)
        code_elem = ElementTree.SubElement(pre, 'code')
        if lang:
            code_elem.set('class', f'language-{lang}')
        code_elem.text = markdown.util.AtomicString(code)


class FencedCodeExtension(markdown.Extension):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.stash = []

    def reset(self):
        self.stash.clear()

    def extendMarkdown(self, md):
        md.registerExtension(self)
        md.preprocessors.register(
            FencedCodePreprocessor(md, self.stash),
            'mr-fenced-code-stash', grammar.priority('mr-fenced-code-stash'))
        md.parser.blockprocessors.register(
            FencedCodeBlockProcessor(md.parser, self.stash),
            'mr-fenced-code', grammar.priority('mr-fenced-code'))


def makeExtension(**kwargs):
    return FencedCodeExtension(**kwargs)
