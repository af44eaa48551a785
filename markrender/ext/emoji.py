'''
# Emoji Extension

:name: becomes the named emoji character, for a small, fixed set of names. Any other :name: is
left exactly as written.
'''

from ..lib import grammar
from . import util

import markdown

from types import MappingProxyType
from xml.etree import ElementTree


NAME = 'mr.emoji'

EMOJI = MappingProxyType({
    'smile':    '\U0001F604',
    'heart':    '❤️',
    'thumbsup': '\U0001F44D',
    'star':     '⭐',
    'fire':     '\U0001F525',
    'warning':  '⚠️',
    'rocket':   '\U0001F680',
    'check':    '✅',
    'x':        '❌',
})

EMOJI_RE = r':(?P<name>[a-z0-9_+-]+):'


class EmojiProcessor(markdown.inlinepatterns.InlineProcessor):
    def handleMatch(self, match, data):
        name = match.group('name')
        char = EMOJI.get(name)
        if char is None:
            return None, None, None

        element = ElementTree.Element('span', {'class': 'emoji', 'title': name})
        element.text = markdown.util.AtomicString(char)
        util.set_raw(element, match.group(0))
        return element, match.start(0), match.end(0)


class EmojiExtension(markdown.Extension):
    def extendMarkdown(self, md):
        md.inlinePatterns.register(
            EmojiProcessor(EMOJI_RE, md), 'mr-emoji', grammar.priority('mr-emoji'))


def makeExtension(**kwargs):
    return EmojiExtension(**kwargs)
