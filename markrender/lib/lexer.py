'''
Tokenisation: Markdown text in, Document out.

This is the first half of Python Markdown's own Markdown.convert(): preprocessors, block parsing
and tree processors (which include inline processing). Serialisation and postprocessing happen
later, in the renderer.

Grammar extensions are applied to a fresh Markdown instance for each document, so nothing carries
over from one document to the next (footnote numbering, raw HTML, stashed code, etc.).
'''

from __future__ import annotations
from . import nesting
from .document import Document
from .progress import Progress

import markdown

from typing import Any, Dict, List, Optional
from xml.etree import ElementTree


NAME = 'lexer'  # For progress/error messages

BASELINE_EXTENSIONS: List[str] = ['tables', 'footnotes', 'pymdownx.tilde', 'nl2br', 'smarty', 'toc']

GRAMMAR_EXTENSIONS: List[str] = [
    'markrender.ext.fenced_code',
    'markrender.ext.normalise',
    'markrender.ext.tasklists',
    'markrender.ext.math',
    'markrender.ext.video',
    'markrender.ext.scripts',
    'markrender.ext.mark',
    'markrender.ext.emoji',
]

EXTENSION_CONFIGS: Dict[str, Dict[str, Any]] = {
    'footnotes': {
        'USE_DEFINITION_ORDER': False,  # Number footnotes by first reference.
    },
    'pymdownx.tilde': {
        'subscript': False,             # markrender.ext.scripts does this.
        'smart_delete': False,
    },
    'toc': {
        'marker': '',                   # Heading ids only; no '[TOC]' replacement.
    },
}

# Deferred to the renderer, so that escaped characters ('\$') stay distinguishable from real
# delimiters until the annotator has finished looking for math.
DEFERRED_TREEPROCESSORS = ['unescape']


def build_markdown() -> markdown.Markdown:
    return markdown.Markdown(
        extensions = BASELINE_EXTENSIONS + GRAMMAR_EXTENSIONS,
        extension_configs = EXTENSION_CONFIGS,
        output_format = 'html',
    )


def normalise_newlines(text: str) -> str:
    return text.replace('\r\n', '\n').replace('\r', '\n')


class Lexer:
    def __init__(self, progress: Optional[Progress] = None):
        self.progress = progress or Progress()


    def tokenize(self, text: str) -> Document:
        md = build_markdown()
        text = normalise_newlines(str(text or ''))

        if not text.strip():
            return Document(ElementTree.Element(md.doc_tag), md)

        for name in DEFERRED_TREEPROCESSORS:
            md.treeprocessors.deregister(name, strict = False)

        # Block parsing recurses once per level of list/quote nesting, as do some tree processors.
        with nesting.recursion_headroom(nesting.text_depth(text)):
            lines = text.split('\n')
            for preprocessor in md.preprocessors:
                lines = preprocessor.run(lines)

            root = md.parser.parseDocument(lines).getroot()

            for treeprocessor in md.treeprocessors:
                new_root = treeprocessor.run(root)
                if new_root is not None:
                    root = new_root

        return Document(root, md)
