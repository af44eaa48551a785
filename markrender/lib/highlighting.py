'''
Syntax highlighting, via Pygments.

The LanguageRegistry decides which code-block language tags get highlighted at all. It is built
once per configuration and is read-only afterwards, so any number of renders (on any number of
threads) can share it. LanguageRegistry.shared() keeps one registry per configuration for the
whole process.
'''

from __future__ import annotations
from .options import RendererOptions
from .progress import Progress

import pygments
import pygments.formatters
import pygments.lexers
import pygments.util

import threading
from types import MappingProxyType
from typing import Mapping, Optional


NAME = 'highlighting'  # For progress/error messages

# Highlighted out of the box.
ESSENTIAL_LANGUAGES = ['javascript', 'css', 'markup', 'clike', 'c', 'python', 'java', 'csharp']

# Common file extensions, and the languages they denote.
COMMON_EXTENSIONS = {
    'js': 'javascript',
    'jsx': 'jsx',
    'ts': 'typescript',
    'tsx': 'tsx',
    'py': 'python',
    'rb': 'ruby',
    'java': 'java',
    'cs': 'csharp',
    'c': 'c',
    'cpp': 'cpp',
    'css': 'css',
    'html': 'markup',
    'xml': 'markup',
    'md': 'markdown',
    'json': 'json',
    'yaml': 'yaml',
    'yml': 'yaml',
    'sql': 'sql',
    'sh': 'bash',
    'bash': 'bash',
    'php': 'php',
}

# Language names that Pygments knows by another name.
PYGMENTS_NAMES = {
    'markup': 'html',
    'clike': 'c',
    'csharp': 'csharp',
}

# Never highlighted; these fall through to plain escaped code.
PLAIN_LANGUAGES = {'text', 'plaintext', 'plain', 'txt'}


def _pygments_alias(language: str) -> Optional[str]:
    alias = PYGMENTS_NAMES.get(language, language)
    try:
        pygments.lexers.find_lexer_class_by_name(alias)
    except pygments.util.ClassNotFound:
        return None
    return alias


class LanguageRegistry:
    _shared: dict = {}
    _shared_lock = threading.Lock()

    def __init__(self, options: Optional[RendererOptions] = None, progress: Optional[Progress] = None):
        options = options or RendererOptions()
        progress = progress or Progress()
        table: dict[str, str] = {}

        def bind(tag: str, language: str, report: bool = False):
            alias = _pygments_alias(language)
            if alias is None:
                if report:
                    progress.warning(NAME, msg = f'Language "{language}" (for "{tag}") is not available')
                return
            table.setdefault(tag, alias)

        for language in ESSENTIAL_LANGUAGES:
            bind(language, language)

        for ext, language in COMMON_EXTENSIONS.items():
            bind(language, language)
            bind(ext, language)

        for ext, language in options.dynamic_file_types.items():
            bind(language, language, report = True)
            bind(ext, language, report = True)

        if options.load_additional_languages:
            for _name, aliases, _filenames, _mimetypes in pygments.lexers.get_all_lexers():
                for alias in aliases:
                    table.setdefault(alias.lower(), alias)

        self._table: Mapping[str, str] = MappingProxyType(table)


    @classmethod
    def shared(cls, options: Optional[RendererOptions] = None,
               progress: Optional[Progress] = None) -> LanguageRegistry:
        '''
        Returns the process-wide registry for the given configuration, building it the first
        time it is asked for.
        '''
        options = options or RendererOptions()
        key = options.cache_key
        with cls._shared_lock:
            registry = cls._shared.get(key)
            if registry is None:
                registry = cls(options, progress)
                cls._shared[key] = registry
        return registry


    @property
    def languages(self) -> Mapping[str, str]:
        return self._table


    def resolve(self, language: Optional[str]) -> Optional[str]:
        '''Returns the Pygments alias for a code-block language tag, or None.'''
        if not language:
            return None
        language = language.strip().lower()
        if language in PLAIN_LANGUAGES:
            return None
        return self._table.get(language)


    def __contains__(self, language) -> bool:
        return self.resolve(language) is not None



class Highlighter:
    '''
    Turns source code into highlighted HTML (without the surrounding <pre><code>). Returns None
    for languages the registry doesn't recognise. Pygments errors propagate to the caller.
    '''

    def __init__(self, registry: LanguageRegistry):
        self.registry = registry
        self._formatter = pygments.formatters.HtmlFormatter(nowrap = True)

    def highlight(self, code: str, language: Optional[str]) -> Optional[str]:
        alias = self.registry.resolve(language)
        if alias is None:
            return None
        lexer = pygments.lexers.get_lexer_by_name(alias, stripnl = False, ensurenl = True)
        return pygments.highlight(code, lexer, self._formatter)
