'''
# Mark Extension

==text== becomes <mark>text</mark>. The shortest span wins, it stays on one line, and the content
can't itself contain '=='.
'''

from ..lib import grammar
from . import util

import markdown

from xml.etree import ElementTree


NAME = 'mr.mark'

MARK_RE = r'(?<!=)==(?!=)(?P<content>(?:(?!==)[^\n])+?)==(?!=)'


class MarkProcessor(markdown.inlinepatterns.InlineProcessor):
    def handleMatch(self, match, data):
        content = match.group('content')
        if not content.strip():
            return None, None, None

        element = ElementTree.Element('mark')
        element.text = content
        util.set_raw(element, match.group(0))
        return element, match.start(0), match.end(0)


class MarkExtension(markdown.Extension):
    def extendMarkdown(self, md):
        md.inlinePatterns.register(
            MarkProcessor(MARK_RE, md), 'mr-highlight', grammar.priority('mr-highlight'))


def makeExtension(**kwargs):
    return MarkExtension(**kwargs)
