from markdown.util import STX, ETX

import re
from xml.etree import ElementTree


# Attributes with this prefix carry bookkeeping data from the grammar rules to the annotator and
# renderer. The renderer removes them before serialising.
DATA_PREFIX = 'data-mr-'
RAW_ATTR = DATA_PREFIX + 'raw'


def placeholder(kind: str, index: int) -> str:
    return f'{STX}mr-{kind}:{index}{ETX}'


def placeholder_re(kind: str) -> re.Pattern:
    return re.compile(f'{STX}mr-{kind}:(?P<id>[0-9]+){ETX}')


def set_raw(element: ElementTree.Element, raw: str):
    '''Records the source text a grammar rule matched, for Node.raw.'''
    element.set(RAW_ATTR, raw)


def strip_data_attributes(root: ElementTree.Element):
    for element in root.iter():
        for key in [k for k in element.keys() if k.startswith(DATA_PREFIX)]:
            del element.attrib[key]


def has_class(element: ElementTree.Element, css_class: str) -> bool:
    return css_class in (element.get('class') or '').split()
