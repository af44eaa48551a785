'''
The annotation pass: one walk over a freshly-tokenised Document, collecting what the renderer and
the math substitution pass need to know in advance.
'''

from __future__ import annotations
from .document import (Document, DiagramBlock, MathExpression, NodeType, DIAGRAM_LANGUAGE,
                       MATH_LANGUAGES)

import dataclasses
import re
from typing import List, Tuple


NAME = 'annotator'  # For progress/error messages

# Math left in plain text (not claimed by the math grammar rules; e.g., '$$x$$' mid-paragraph).
LEFTOVER_BLOCK_MATH_RE = re.compile(r'\$\$(?!\$)(?P<content>.*?)\$\$', re.DOTALL)
LEFTOVER_INLINE_MATH_RE = re.compile(r'\$(?P<content>[^$\n]+)\$')

STEP_FOR_TYPE = {
    NodeType.HEADING:             'headings',
    NodeType.PARAGRAPH:           'paragraphs',
    NodeType.LIST:                'lists',
    NodeType.TASK_ITEM:           'task_lists',
    NodeType.CODE_BLOCK:          'code_blocks',
    NodeType.BLOCK_QUOTE:         'block_quotes',
    NodeType.TABLE:               'tables',
    NodeType.THEMATIC_BREAK:      'thematic_breaks',
    NodeType.RAW_HTML:            'raw_html',
    NodeType.FOOTNOTE_SECTION:    'footnotes',
    NodeType.FOOTNOTE_REFERENCE:  'footnotes',
    NodeType.LINK:                'links',
    NodeType.IMAGE:               'images',
    NodeType.MATH_INLINE:         'math',
    NodeType.MATH_BLOCK:          'math',
    NodeType.EMOJI:               'emoji',
    NodeType.VIDEO_THUMBNAIL:     'videos',
}


def find_leftover_math(text: str) -> List[MathExpression]:
    '''
    Pattern-matches math in a piece of plain text. '$$...$$' is found first, and those spans are
    blanked out before looking for '$...$', so block delimiters are never read as two inline
    ones. An inline match that touches a '$$' delimiter is skipped as well.
    '''
    expressions = []
    masked = list(text)
    for match in LEFTOVER_BLOCK_MATH_RE.finditer(text):
        content = match.group('content').strip()
        if content:
            expressions.append(MathExpression('block', content))
        masked[match.start():match.end()] = ' ' * (match.end() - match.start())

    masked_text = ''.join(masked)
    for match in LEFTOVER_INLINE_MATH_RE.finditer(masked_text):
        start, end = match.span()
        if (start > 0 and text[start - 1] == '$') or (end < len(text) and text[end] == '$'):
            continue
        content = match.group('content').strip()
        if content:
            expressions.append(MathExpression('inline', content))

    return expressions


def annotate(document: Document) -> Document:
    languages: List[str] = []
    diagrams: List[DiagramBlock] = []
    maths: List[MathExpression] = []
    steps: List[str] = []

    def step(name: str):
        if name not in steps:
            steps.append(name)

    for node in document.walk():
        if node.type in STEP_FOR_TYPE:
            step(STEP_FOR_TYPE[node.type])

        if node.type == NodeType.CODE_BLOCK:
            language = node.language
            if language == DIAGRAM_LANGUAGE:
                diagrams.append(DiagramBlock(node.text, node.path))
                step('diagrams')
            else:
                if language and language not in languages:
                    languages.append(language)
                if language in MATH_LANGUAGES:
                    content = node.text.strip()
                    if content:
                        maths.append(MathExpression('block', content, True, node.path))
                        step('math')

        elif node.type in (NodeType.MATH_INLINE, NodeType.MATH_BLOCK):
            maths.append(MathExpression('block' if node.display_mode else 'inline',
                                        node.content, False, node.path))

        elif node.type == NodeType.TEXT:
            leftovers = find_leftover_math(node.value)
            if leftovers:
                maths.extend(leftovers)
                step('math')

    return dataclasses.replace(
        document,
        code_languages = tuple(languages),
        diagram_blocks = tuple(diagrams),
        math_expressions = tuple(maths),
        render_steps = tuple(steps),
    )


def summary(document: Document) -> Tuple[int, int, int]:
    '''(node count, diagram count, math expression count), for progress messages.'''
    return (sum(1 for _ in document.walk()),
            len(document.diagram_blocks or ()),
            len(document.math_expressions or ()))
