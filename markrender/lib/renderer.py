'''
The tree renderer: annotated Document in, HTML out (with math placeholders still in it).

Rendering works on a copy of the document tree, so a Document can be rendered any number of
times, always with the same result. The copy is adjusted (code highlighting, diagram containers,
math placeholders), then serialised, and then passed through the Markdown instance's
postprocessors, exactly as Markdown.convert() would have done.
'''

from __future__ import annotations
from .document import Document, InvalidDocumentError, NodeType
from .highlighting import Highlighter, LanguageRegistry
from . import nesting
from .options import RendererOptions
from .progress import Progress
from ..ext import util
from ..ext.math import BLOCK_CLASS

import markdown

import copy
from typing import List, Optional
from xml.etree import ElementTree


NAME = 'renderer'  # For progress/error messages

DIAGRAM_CLASS = 'mermaid'
DIAGRAM_ID = 'mermaid-diagram-{index}'

HIGHLIGHT_CLASS = 'highlight'

HTML_PLACEHOLDER_RE = util.placeholder_re('html')


def math_placeholder(index: int) -> str:
    return util.placeholder('math', index)


def _replace_element(element: ElementTree.Element, tag: str, attrib: dict, text: str):
    '''Turns an element into a different one, in place (so paths to it stay valid).'''
    tail = element.tail
    element.clear()
    element.tag = tag
    element.attrib.update(attrib)
    element.text = markdown.util.AtomicString(text)
    element.tail = tail


class TreeRenderer:
    def __init__(self,
                 options: Optional[RendererOptions] = None,
                 highlighter: Optional[Highlighter] = None,
                 progress: Optional[Progress] = None):
        self.options = options or RendererOptions()
        self.progress = progress or Progress()
        self.highlighter = highlighter or Highlighter(
            LanguageRegistry.shared(self.options, self.progress))


    def render(self, document: Document) -> str:
        if not isinstance(document, Document):
            raise InvalidDocumentError(
                f'Expected a Document, but got {type(document).__name__}')
        if not document.annotated:
            raise InvalidDocumentError('Document must be annotated before it is rendered')
        if not isinstance(document.root, ElementTree.Element) or document.md is None:
            raise InvalidDocumentError('Document has no tree to render')

        # Copying and serialising are both recursive, one level per element.
        with nesting.recursion_headroom(nesting.tree_depth(document.root)):
            return self._render(document)


    def _render(self, document: Document) -> str:
        md = document.md
        root = copy.deepcopy(document.root)
        fragments: List[str] = []

        def element_at(path):
            element = root
            for index in path:
                element = element[index]
            return element

        replaced = set()
        for index, expression in enumerate(document.math_expressions):
            if expression.path is None:
                continue  # Left for the substitution pass to find by pattern.
            element = element_at(expression.path)
            if expression.from_code_block:
                _replace_element(element, 'div', {'class': BLOCK_CLASS}, math_placeholder(index))
                replaced.add(expression.path)
            else:
                element.text = markdown.util.AtomicString(math_placeholder(index))

        for index, diagram in enumerate(document.diagram_blocks):
            _replace_element(element_at(diagram.path),
                             'div',
                             {'class': DIAGRAM_CLASS, 'id': DIAGRAM_ID.format(index = index)},
                             markdown.util.code_escape(diagram.content))
            replaced.add(diagram.path)

        for node in document.walk():
            # Indented code blocks (with no raw source recorded) were escaped by Python Markdown.
            if node.type != NodeType.CODE_BLOCK or node.path in replaced or node.raw is None:
                continue

            code = element_at(node.path)[0]
            markup = None
            if self.options.highlight and node.language:
                markup = self._highlight(node.text, node.language)

            if markup is None:
                code.text = markdown.util.AtomicString(markdown.util.code_escape(node.text) + '\n')
            else:
                element_at(node.path).set('class', HIGHLIGHT_CLASS)
                code.text = markdown.util.AtomicString(util.placeholder('html', len(fragments)))
                fragments.append(markup)

        util.strip_data_attributes(root)
        markdown.treeprocessors.UnescapeTreeprocessor(md).run(root)

        output = self._serialise(md, root)
        for postprocessor in md.postprocessors:
            output = postprocessor.run(output)

        output = HTML_PLACEHOLDER_RE.sub(lambda m: fragments[int(m.group('id'))], output)
        return output.strip()


    def _highlight(self, code: str, language: str) -> Optional[str]:
        try:
            return self.highlighter.highlight(code, language)
        except Exception as e:
            self.progress.warning(
                NAME, msg = f'Could not highlight "{language}" code ({e}); showing it unhighlighted')
            return None


    def _serialise(self, md: markdown.Markdown, root: ElementTree.Element) -> str:
        output = md.serializer(root)
        if not md.stripTopLevelTags:
            return output

        # Remove the document's own enclosing <div>, as Markdown.convert() does.
        open_tag = f'<{md.doc_tag}>'
        close_tag = f'</{md.doc_tag}>'
        try:
            start = output.index(open_tag) + len(open_tag)
            end = output.rindex(close_tag)
            return output[start:end].strip()
        except ValueError:
            return ''
