'''
The public API: MarkdownRenderer, and the render() convenience function.

A MarkdownRenderer holds only immutable configuration (options, language registry, math
formatter), so one instance can be shared between threads. Each render builds and discards its own
document tree.

render() never raises for string input; the worst outcome is an error panel in the returned HTML.
The two-phase API (parse() then render_document()) is stricter, and render_document() raises
InvalidDocumentError when given anything other than a Document from parse().
'''

from __future__ import annotations
from . import annotator
from .document import Document, InvalidDocumentError
from .highlighting import Highlighter, LanguageRegistry
from .lexer import Lexer
from .math_formatter import MathFormatter
from .math_substitution import MathFormatterFn, MathSubstituter
from .options import RendererOptions
from .progress import Progress
from .renderer import TreeRenderer

import asyncio
import os
from typing import Any, Dict, Optional


NAME = 'markrender'  # For progress/error messages

NO_CONTENT_HTML = '<p><em>No content to render</em></p>'


class MarkdownFileError(OSError):
    '''A markdown file could not be read.'''

    def __init__(self, path, cause: Exception):
        super().__init__(f'Error reading markdown file "{path}": {cause}')
        self.path = path
        self.cause = cause


class MarkdownRenderer:
    def __init__(self,
                 options: Optional[RendererOptions] = None,
                 *,
                 highlight: bool = True,
                 load_additional_languages: bool = False,
                 dynamic_file_types: Optional[Dict[str, Any]] = None,
                 progress: Optional[Progress] = None,
                 registry: Optional[LanguageRegistry] = None,
                 math_formatter: Optional[MathFormatterFn] = None):

        self.options = options or RendererOptions.from_kwargs(
            highlight = highlight,
            load_additional_languages = load_additional_languages,
            dynamic_file_types = dynamic_file_types)

        self.progress = progress or Progress()
        self.registry = registry or LanguageRegistry.shared(self.options, self.progress)
        self.math_formatter = math_formatter or MathFormatter()

        self._lexer = Lexer(self.progress)
        self._renderer = TreeRenderer(self.options, Highlighter(self.registry), self.progress)
        self._substituter = MathSubstituter(self.math_formatter, self.progress)


    def parse(self, text: str) -> Document:
        return annotator.annotate(self._lexer.tokenize(text))


    def render_document(self, document: Document) -> str:
        html = self._renderer.render(document)  # Checks the document first.
        return self._substituter.substitute(html, document.math_expressions)


    def render(self, text: Optional[str]) -> str:
        if text is None or not str(text).strip():
            return NO_CONTENT_HTML

        try:
            return self.render_document(self.parse(text))

        except Exception as e:
            return self.progress.error(
                NAME, msg = 'Error rendering markdown', exception = e).as_html_str()


    def render_file_sync(self, path) -> str:
        return self.render(self._read(path))


    async def render_file(self, path) -> str:
        text = await asyncio.to_thread(self._read, path)
        return self.render(text)


    def info(self, document: Document) -> Dict[str, Any]:
        if not isinstance(document, Document) or not document.annotated:
            raise InvalidDocumentError('info() requires a Document from parse()')
        node_count, diagram_count, math_count = annotator.summary(document)
        return {
            'code_languages': list(document.code_languages),
            'has_diagrams': diagram_count > 0,
            'has_math': math_count > 0,
            'token_count': len(document.children),
            'node_count': node_count,
        }


    def _read(self, path) -> str:
        try:
            with open(os.fspath(path), encoding = 'utf-8') as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise MarkdownFileError(path, e) from e


def render(text: Optional[str], **options) -> str:
    '''
    Renders markdown text to HTML in one step. Keyword arguments are as for MarkdownRenderer.
    '''
    return MarkdownRenderer(**options).render(text)
