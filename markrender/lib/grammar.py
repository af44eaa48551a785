'''
The grammar rule set, and its ordering relative to Python Markdown's own (baseline) processors.

Python Markdown applies processors in descending priority order, and the first block processor
to accept a block wins. Inline processors are applied one at a time, each to the whole remaining
text, so a higher-priority inline rule gets first claim on any characters it matches.

Every extension in markrender.ext registers its processors using priority() below, so the whole
ordering can be read off this one table. The constraints it encodes:

* Fenced code and block math are recognised before indented code could claim a nested fence, but
  after list continuation ('indent'), so fences inside list items still nest properly.
* Inline math runs straight after code spans (and before backslash escapes), so nothing inside
  `...` is math, and nothing inside $...$ is emphasis, sub/superscript, etc.
* The video thumbnail syntax contains a link, so it must be tried before 'link'.
* Strikethrough comes from pymdownx.tilde, whose processor names and priorities differ between
  releases. It is not ordered against here. The subscript rule never matches a doubled tilde, so
  '~~x~~' is left for strikethrough whichever of the two runs first.
* Subscript, superscript, highlight and emoji all come before emphasis, so their content can
  still contain emphasis.
* Task items are made after block parsing but before inline processing ('inline'), so loose
  list items already have their paragraphs, and labels are still plain text.
'''

from dataclasses import dataclass
from typing import Dict, Tuple


PREPROCESSOR = 'preprocessor'
BLOCK = 'block'
INLINE = 'inline'
TREEPROCESSOR = 'treeprocessor'
POSTPROCESSOR = 'postprocessor'


@dataclass(frozen = True)
class GrammarRule:
    name: str
    level: str
    priority: int
    syntax: str


RULES: Tuple[GrammarRule, ...] = (
    GrammarRule('mr-fenced-code-stash', PREPROCESSOR, 25, '```lang ... ``` and ~~~lang ... ~~~'),
    GrammarRule('mr-task-markers',      PREPROCESSOR, 24, '*[x] / + [ ] bullets become "- [x] "'),
    GrammarRule('mr-block-math-wrap',   PREPROCESSOR, 23, '$$...$$ at line start becomes a $$ block'),

    GrammarRule('mr-fenced-code',       BLOCK,        85, 'fenced code placeholder'),
    GrammarRule('mr-block-math',        BLOCK,        78, '$$ / content / $$'),

    GrammarRule('mr-math-inline',       INLINE,      185, '$expr$'),
    GrammarRule('mr-video-thumbnail',   INLINE,      165, '@[youtube-thumbnail](url)'),
    GrammarRule('mr-subscript',         INLINE,       64, '~text~'),
    GrammarRule('mr-superscript',       INLINE,       63, '^text^'),
    GrammarRule('mr-highlight',         INLINE,       62, '==text=='),
    GrammarRule('mr-emoji',             INLINE,       61, ':name:'),

    GrammarRule('mr-task-list',         TREEPROCESSOR, 25, '- [ ] label, - [x] label'),

    GrammarRule('mr-attributes',        POSTPROCESSOR, 15, 'generated attribute clean-up'),
)

# The Python Markdown processors the rules are ordered against, by level. For
# reference and for tests; these are registered by the libraries themselves.
BASELINE: Dict[str, Dict[str, int]] = {
    PREPROCESSOR: {
        'normalize_whitespace': 30,
        'html_block':           20,
    },
    BLOCK: {
        'indent':               90,
        'code':                 80,
        'table':                75,
        'hashheader':           70,
        'setextheader':         60,
        'hr':                   50,
        'olist':                40,
        'quote':                20,
        'footnote':             17,
        'reference':            15,
        'paragraph':            10,
    },
    INLINE: {
        'backtick':             190,
        'escape':               180,
        'footnote':             175,
        'link':                 160,
        'html':                 90,
        'em_strong':            60,
    },
    TREEPROCESSOR: {
        'footnote':             50,
        'inline':               20,
        'prettify':             10,
        'toc':                  5,
    },
    POSTPROCESSOR: {
        'raw_html':             30,
        'amp_substitute':       20,
    },
}

_BY_NAME = {rule.name: rule for rule in RULES}


def priority(name: str) -> int:
    return _BY_NAME[name].priority


def rules(level: str) -> Tuple[GrammarRule, ...]:
    '''The rules at one level, in the order Python Markdown will try them.'''
    return tuple(sorted((r for r in RULES if r.level == level),
                        key = lambda r: r.priority,
                        reverse = True))
