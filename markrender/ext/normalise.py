'''
# Normalise Extension

Source and output clean-up around the grammar rules:

* TaskMarkerPreprocessor collapses task-list bullet variants ('*[x]', '+  [ ]', '-[X]') into the
  canonical '- [x] ' form that the task list rule expects.

* BlockMathPreprocessor re-wraps '$$...$$' at the start of a line (possibly all on one line) so
  that each '$$' delimiter sits on its own line, where the block math rule finds it.

* AttributePostprocessor tidies generated attributes in the final HTML: table alignment styles
  lose their spaces and trailing ';', and links opening in a new tab get rel="noopener
  noreferrer".

Fenced code has already been stashed by the time these preprocessors run, so neither touches the
content of a code block.
'''

from ..lib import grammar

import markdown

import re


NAME = 'mr.normalise'

TASK_MARKER_RE = re.compile(r'(?m)^([ \t]*)[-*+][ \t]*\[([ xX])\][ \t]*')

BLOCK_MATH_RE = re.compile(r'''(?xms)
    ^(?P<prefix>[ \t>]*)
    \$\$
    (?P<content>(?:(?!\$\$).)+?)
    \$\$
    [ \t]*$
''')

ALIGN_STYLE_RE = re.compile(r'style="text-align: ?(?P<align>\w+);?"')

BLANK_TARGET_RE = re.compile(r'<a (?P<attrs>[^>]*\btarget="_blank"[^>]*)>')


class TaskMarkerPreprocessor(markdown.preprocessors.Preprocessor):
    def run(self, lines):
        return [TASK_MARKER_RE.sub(r'\1- [\2] ', line) for line in lines]


class BlockMathPreprocessor(markdown.preprocessors.Preprocessor):

    def _replace(self, match):
        prefix = match.group('prefix')
        content_lines = match.group('content').strip().split('\n')

        # Continuation lines carry their own prefix already.
        bare = prefix.rstrip()
        stripped = [
            line[len(prefix):] if line.startswith(prefix)
            else line[len(bare):] if bare and line.startswith(bare)
            else line
            for line in content_lines
        ]

        body = '\n'.join(f'{prefix}{line.strip()}' for line in stripped if line.strip())
        if not body:
            return match.group(0)
        return f'{bare}\n{prefix}$$\n{body}\n{prefix}$$\n{bare}'

    def run(self, lines):
        text = '\n'.join(lines)
        return BLOCK_MATH_RE.sub(self._replace, text).split('\n')


class AttributePostprocessor(markdown.postprocessors.Postprocessor):

    def _rel(self, match):
        attrs = match.group('attrs')
        if re.search(r'\brel="', attrs):
            return match.group(0)
        return f'<a {attrs} rel="noopener noreferrer">'

    def run(self, text):
        text = ALIGN_STYLE_RE.sub(r'style="text-align:\g<align>"', text)
        return BLANK_TARGET_RE.sub(self._rel, text)


class NormaliseExtension(markdown.Extension):
    def __init__(self, **kwargs):
        self.config = {
            'task_markers': [True, 'Collapse task list bullet variants to "- [x] ".'],
            'block_math': [True, 'Put the $$ delimiters of block math on their own lines.'],
            'attributes': [True, 'Tidy generated attributes in the output HTML.'],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        if self.getConfig('task_markers'):
            md.preprocessors.register(
                TaskMarkerPreprocessor(md),
                'mr-task-markers', grammar.priority('mr-task-markers'))

        if self.getConfig('block_math'):
            md.preprocessors.register(
                BlockMathPreprocessor(md),
                'mr-block-math-wrap', grammar.priority('mr-block-math-wrap'))

        if self.getConfig('attributes'):
            md.postprocessors.register(
                AttributePostprocessor(md),
                'mr-attributes', grammar.priority('mr-attributes'))


def makeExtension(**kwargs):
    return NormaliseExtension(**kwargs)
