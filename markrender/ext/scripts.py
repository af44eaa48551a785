'''
# Scripts Extension

~text~ becomes <sub>text</sub>, and ^text^ becomes <sup>text</sup>.

Each matches the shortest span on a single line. A doubled delimiter never takes part, so '~~x~~'
is left for strikethrough (and '^^' for anything else that claims it). Math is tokenised before
either of these, so '$x^2$' and '$a~b$' are unaffected.
'''

from ..lib import grammar
from . import util

import markdown

from xml.etree import ElementTree


NAME = 'mr.scripts'


def _script_re(delim: str) -> str:
    d = '\\' + delim
    return rf'(?<!{d}){d}(?!{d})(?P<content>[^{d}\n]+?)(?<!{d}){d}(?!{d})'


SUBSCRIPT_RE = _script_re('~')
SUPERSCRIPT_RE = _script_re('^')


class ScriptProcessor(markdown.inlinepatterns.InlineProcessor):
    def __init__(self, pattern, tag, md):
        super().__init__(pattern, md)
        self.tag = tag

    def handleMatch(self, match, data):
        content = match.group('content')
        if not content.strip():
            return None, None, None

        element = ElementTree.Element(self.tag)
        element.text = content
        util.set_raw(element, match.group(0))
        return element, match.start(0), match.end(0)


class ScriptsExtension(markdown.Extension):
    def __init__(self, **kwargs):
        self.config = {
            'subscript': [True, 'Recognise ~text~ as subscript.'],
            'superscript': [True, 'Recognise ^text^ as superscript.'],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        if self.getConfig('subscript'):
            md.inlinePatterns.register(
                ScriptProcessor(SUBSCRIPT_RE, 'sub', md),
                'mr-subscript', grammar.priority('mr-subscript'))

        if self.getConfig('superscript'):
            md.inlinePatterns.register(
                ScriptProcessor(SUPERSCRIPT_RE, 'sup', md),
                'mr-superscript', grammar.priority('mr-superscript'))


def makeExtension(**kwargs):
    return ScriptsExtension(**kwargs)
