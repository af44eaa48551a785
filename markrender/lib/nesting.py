'''
Recursion headroom for deeply nested documents.

Python Markdown parses nested containers (list items, block quotes) recursively, and its
serialiser walks the tree the same way. The interpreter's default recursion limit allows a couple
of hundred levels of nesting, beyond which lists raise RecursionError and block quotes are
silently flattened (Python Markdown stops recognising '>' when it is near the limit; see
markdown.util.nearing_recursion_limit()).

recursion_headroom() raises the limit for the duration of one operation, by an amount estimated
from the input's nesting depth, so that depth is bounded by memory rather than by the default
limit. The limit is process-wide, so concurrent operations share one raised limit, which is
restored once the last of them finishes.
'''

from contextlib import contextmanager
import re
import sys
import threading
from typing import Iterator, Optional
from xml.etree import ElementTree


# Generous, per nesting level: the block parser uses around five frames for each list level, and
# fewer for block quotes.
FRAMES_PER_LEVEL = 20

TAB_LENGTH = 4

_PREFIX_RE = re.compile(r'^[ \t>]*', re.MULTILINE)

_lock = threading.Lock()
_active = 0
_base_limit: Optional[int] = None


def text_depth(text: str) -> int:
    '''
    An upper estimate of how deeply the markdown text nests: for each line, the number of '>'
    markers plus the number of indentation steps before its content.
    '''
    depth = 0
    for match in _PREFIX_RE.finditer(text):
        prefix = match.group()
        if not prefix:
            continue
        quotes = prefix.count('>')
        indent = len(prefix.replace('>', ' ').expandtabs(TAB_LENGTH)) - quotes
        depth = max(depth, quotes + indent // TAB_LENGTH)
    return depth + 1


def tree_depth(root: ElementTree.Element) -> int:
    '''The number of elements on the longest path down from root (found without recursion).'''
    depth = 0
    stack = [(root, 1)]
    while stack:
        element, level = stack.pop()
        depth = max(depth, level)
        stack.extend((child, level + 1) for child in element)
    return depth


@contextmanager
def recursion_headroom(levels: int) -> Iterator[None]:
    global _active, _base_limit

    with _lock:
        if _active == 0:
            _base_limit = sys.getrecursionlimit()
        _active += 1
        limit = _base_limit + levels * FRAMES_PER_LEVEL
        if limit > sys.getrecursionlimit():
            sys.setrecursionlimit(limit)

    try:
        yield

    finally:
        with _lock:
            _active -= 1
            if _active == 0:
                sys.setrecursionlimit(_base_limit)
                _base_limit = None
