'''
The document tree: what the lexer produces, the annotator enriches, and the renderer consumes.

The tree itself is the ElementTree that Python Markdown builds. Document and Node give it a typed,
read-only view: each element that corresponds to a syntactic unit is classified as a NodeType
(by its tag and class), and text content appears as TEXT nodes. Elements with no counterpart
(table rows, checkboxes, etc.) are transparent; their contents appear as if they belonged to the
enclosing node.
'''

from __future__ import annotations
from ..ext import util
from ..ext.video import video_id as _video_id

import markdown

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple
from xml.etree import ElementTree


class InvalidDocumentError(ValueError):
    '''Raised when something other than an annotated Document is given to the renderer.'''


class NodeType(Enum):
    DOCUMENT = 'document'
    HEADING = 'heading'
    PARAGRAPH = 'paragraph'
    LIST = 'list'
    LIST_ITEM = 'list_item'
    TASK_ITEM = 'task_item'
    CODE_BLOCK = 'code_block'
    BLOCK_QUOTE = 'block_quote'
    TABLE = 'table'
    THEMATIC_BREAK = 'thematic_break'
    RAW_HTML = 'raw_html'
    FOOTNOTE_SECTION = 'footnote_section'
    FOOTNOTE_DEFINITION = 'footnote_definition'
    FOOTNOTE_REFERENCE = 'footnote_reference'
    TEXT = 'text'
    EMPHASIS = 'emphasis'
    CODE_SPAN = 'code_span'
    LINK = 'link'
    IMAGE = 'image'
    SUBSCRIPT = 'subscript'
    SUPERSCRIPT = 'superscript'
    HIGHLIGHT = 'highlight'
    MATH_INLINE = 'math_inline'
    MATH_BLOCK = 'math_block'
    EMOJI = 'emoji'
    VIDEO_THUMBNAIL = 'video_thumbnail'


DIAGRAM_LANGUAGE = 'mermaid'
MATH_LANGUAGES = frozenset({'math', 'katex', 'tex'})

_SIMPLE_TAGS = {
    'h1': NodeType.HEADING,
    'h2': NodeType.HEADING,
    'h3': NodeType.HEADING,
    'h4': NodeType.HEADING,
    'h5': NodeType.HEADING,
    'h6': NodeType.HEADING,
    'ul': NodeType.LIST,
    'ol': NodeType.LIST,
    'pre': NodeType.CODE_BLOCK,
    'blockquote': NodeType.BLOCK_QUOTE,
    'table': NodeType.TABLE,
    'hr': NodeType.THEMATIC_BREAK,
    'em': NodeType.EMPHASIS,
    'strong': NodeType.EMPHASIS,
    'del': NodeType.EMPHASIS,
    'img': NodeType.IMAGE,
    'sub': NodeType.SUBSCRIPT,
    'mark': NodeType.HIGHLIGHT,
}


def classify(element: ElementTree.Element, in_pre: bool = False) -> Optional[NodeType]:
    tag = element.tag
    node_type = _SIMPLE_TAGS.get(tag)
    if node_type is not None:
        return node_type

    if tag == 'p':
        if markdown.util.HTML_PLACEHOLDER_RE.fullmatch((element.text or '').strip()) and len(element) == 0:
            return NodeType.RAW_HTML
        return NodeType.PARAGRAPH

    if tag == 'li':
        if util.has_class(element, 'task-list-item'):
            return NodeType.TASK_ITEM
        if (element.get('id') or '').startswith('fn:'):
            return NodeType.FOOTNOTE_DEFINITION
        return NodeType.LIST_ITEM

    if tag == 'code':
        return None if in_pre else NodeType.CODE_SPAN

    if tag == 'a':
        if util.has_class(element, 'youtube-thumbnail-link'):
            return NodeType.VIDEO_THUMBNAIL
        return NodeType.LINK

    if tag == 'sup':
        if (element.get('id') or '').startswith('fnref'):
            return NodeType.FOOTNOTE_REFERENCE
        return NodeType.SUPERSCRIPT

    if tag == 'span':
        if util.has_class(element, 'math-inline'):
            return NodeType.MATH_INLINE
        if util.has_class(element, 'emoji'):
            return NodeType.EMOJI
        return None

    if tag == 'div':
        if util.has_class(element, 'math-block'):
            return NodeType.MATH_BLOCK
        if util.has_class(element, 'footnote'):
            return NodeType.FOOTNOTE_SECTION
        return None

    return None


def _is_text(value) -> bool:
    return bool(value and value.strip()) and not isinstance(value, markdown.util.AtomicString)


@dataclass(frozen = True)
class Node:
    type: NodeType
    element: ElementTree.Element
    path: Tuple[int, ...]
    document: Document
    attr: Optional[str] = None   # 'text' or 'tail', for TEXT nodes

    def __repr__(self):
        return f'Node({self.type.name}, path={self.path})'

    @property
    def raw(self) -> Optional[str]:
        '''
        The source text this node came from, where known: extension syntax records it as it is
        matched, and raw HTML comes from Python Markdown's stash.
        '''
        if self.type == NodeType.TEXT:
            return self.value
        if self.type == NodeType.RAW_HTML:
            match = markdown.util.HTML_PLACEHOLDER_RE.search(self.element.text or '')
            blocks = self.document.md.htmlStash.rawHtmlBlocks
            index = int(match.group(1))
            if index < len(blocks):
                block = blocks[index]
                return block if isinstance(block, str) else ElementTree.tostring(block, encoding = 'unicode')
            return None
        return self.element.get(util.RAW_ATTR)

    @property
    def value(self) -> Optional[str]:
        if self.attr == 'text':
            return self.element.text
        if self.attr == 'tail':
            return self.element.tail
        return None

    @property
    def level(self) -> Optional[int]:
        return int(self.element.tag[1]) if self.type == NodeType.HEADING else None

    @property
    def checked(self) -> Optional[bool]:
        if self.type != NodeType.TASK_ITEM:
            return None
        checkbox = self.element.find('input')
        if checkbox is None:
            checkbox = self.element.find('p/input')
        return checkbox is not None and checkbox.get('checked') is not None

    @property
    def language(self) -> Optional[str]:
        if self.type != NodeType.CODE_BLOCK:
            return None
        code = self.element.find('code')
        for css_class in ((code.get('class') if code is not None else None) or '').split():
            if css_class.startswith('language-'):
                return css_class[len('language-'):].lower() or None
        return None

    @property
    def text(self) -> Optional[str]:
        '''The source code of a code block (without its trailing newline).'''
        if self.type != NodeType.CODE_BLOCK:
            return None
        code = self.element.find('code')
        return (code.text or '').rstrip('\n') if code is not None else ''

    @property
    def content(self) -> Optional[str]:
        if self.type in (NodeType.MATH_INLINE, NodeType.MATH_BLOCK):
            return self.element.text or ''
        if self.type == NodeType.CODE_BLOCK:
            return self.text
        return None

    @property
    def display_mode(self) -> bool:
        return self.type == NodeType.MATH_BLOCK

    @property
    def name(self) -> Optional[str]:
        return self.element.get('title') if self.type == NodeType.EMOJI else None

    @property
    def url(self) -> Optional[str]:
        if self.type in (NodeType.LINK, NodeType.VIDEO_THUMBNAIL):
            return self.element.get('href')
        if self.type == NodeType.IMAGE:
            return self.element.get('src')
        return None

    @property
    def video_id(self) -> Optional[str]:
        return _video_id(self.url) if self.type == NodeType.VIDEO_THUMBNAIL else None

    @property
    def children(self) -> List[Node]:
        if self.type == NodeType.TEXT:
            return []
        return list(_child_nodes(self.document, self.element, self.path))


def _child_nodes(document: Document, element: ElementTree.Element,
                 path: Tuple[int, ...]) -> Iterator[Node]:
    '''
    The nodes directly beneath an element. Unclassified child elements are looked through, using
    an explicit stack rather than recursion.
    '''
    in_pre = element.tag == 'pre'
    if _is_text(element.text) and not in_pre:
        yield Node(NodeType.TEXT, element, path, document, 'text')

    # Entries are either (element, path, next child index), or (None, element, path) standing
    # for the tail of a transparent element, which comes after all of its contents.
    stack = [(element, path, 0)]
    while stack:
        parent, parent_path, index = stack.pop()
        if parent is None:
            yield Node(NodeType.TEXT, parent_path, index, document, 'tail')
            continue

        if index >= len(parent):
            continue
        stack.append((parent, parent_path, index + 1))

        child = parent[index]
        child_path = parent_path + (index,)
        node_type = classify(child, in_pre)
        if node_type is not None:
            yield Node(node_type, child, child_path, document)
            if _is_text(child.tail):
                yield Node(NodeType.TEXT, child, child_path, document, 'tail')
        else:
            if _is_text(child.tail):
                stack.append((None, child, child_path))
            if _is_text(child.text) and not in_pre:
                yield Node(NodeType.TEXT, child, child_path, document, 'text')
            stack.append((child, child_path, 0))


@dataclass(frozen = True)
class MathExpression:
    type: str               # 'inline' or 'block'
    content: str
    from_code_block: bool = False
    path: Optional[Tuple[int, ...]] = None

    @property
    def display_mode(self) -> bool:
        return self.type == 'block'


@dataclass(frozen = True)
class DiagramBlock:
    content: str
    path: Tuple[int, ...]


@dataclass(frozen = True, eq = False)
class Document:
    root: ElementTree.Element
    md: markdown.Markdown
    code_languages: Optional[Tuple[str, ...]] = None
    diagram_blocks: Optional[Tuple[DiagramBlock, ...]] = None
    math_expressions: Optional[Tuple[MathExpression, ...]] = None
    render_steps: Optional[Tuple[str, ...]] = None

    @property
    def type(self) -> NodeType:
        return NodeType.DOCUMENT

    @property
    def annotated(self) -> bool:
        return None not in (self.code_languages, self.diagram_blocks,
                            self.math_expressions, self.render_steps)

    @property
    def children(self) -> List[Node]:
        return list(_child_nodes(self, self.root, ()))


    def walk(self) -> Iterator[Node]:
        '''
        Every node in document order (parents before their children), however deeply nested.
        '''
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


    def find_all(self, node_type: NodeType) -> List[Node]:
        return [node for node in self.walk() if node.type == node_type]


    def element_at(self, path: Tuple[int, ...]) -> ElementTree.Element:
        element = self.root
        for index in path:
            element = element[index]
        return element
