'''
markrender: Markdown to HTML, via Python Markdown, with task lists, footnotes, sub/superscript,
highlighting, emoji, math (typeset as MathML), Mermaid diagram containers and video thumbnails.

    import markrender
    html = markrender.render('# Title\n\n- [x] Done\n- [ ] Todo')

See markrender.lib.api.MarkdownRenderer for the full API.
'''

from .lib.api import MarkdownRenderer, MarkdownFileError, render
from .lib.document import Document, InvalidDocumentError, Node, NodeType
from .lib.options import OptionsError, RendererOptions

__all__ = [
    'Document',
    'InvalidDocumentError',
    'MarkdownFileError',
    'MarkdownRenderer',
    'Node',
    'NodeType',
    'OptionsError',
    'RendererOptions',
    'render',
]
