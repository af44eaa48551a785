'''
# Task Lists Extension

Turns list items of the form '- [ ] label' / '- [x] label' into task items:

    <ul class="contains-task-list">
    <li class="task-list-item"><input type="checkbox" checked disabled> label</li>
    </ul>

The checkbox letter is case-insensitive. The label remains ordinary inline markdown. Items without
a checkbox stay ordinary list items, even in the same list.

This works on the block-level tree, once every list is complete but before inline processing.
By then, Python Markdown has decided which lists are loose, and wrapped each loose item's text in
a <p>, so the checkbox always goes inside its item's first paragraph. Variant bullets ('*[x]',
'+ [ ]') are collapsed to '- [x] ' beforehand (see normalise.TaskMarkerPreprocessor).
'''

from ..lib import grammar
from . import util

import markdown

import re
from xml.etree import ElementTree


NAME = 'mr.tasklists'

TASK_RE = re.compile(r'^\[(?P<state>[ xX])\][ \t]+(?=\S)')

TASK_ITEM_CLASS = 'task-list-item'
TASK_LIST_CLASS = 'contains-task-list'


class TaskListTreeprocessor(markdown.treeprocessors.Treeprocessor):

    def run(self, root):
        for lst in list(root.iter('ul')):
            found = False
            for li in lst:
                if li.tag == 'li':
                    found = self._convert(li) or found

            if found:
                lst.set('class', TASK_LIST_CLASS)


    def _convert(self, li: ElementTree.Element) -> bool:
        # Tight lists keep the text in the <li> itself; loose lists wrap it in a <p>.
        target = li
        if not (li.text or '').strip() and len(li) > 0 and li[0].tag == 'p':
            target = li[0]

        match = TASK_RE.match(target.text or '')
        if not match:
            return False

        raw = '- ' + target.text
        attrib = {'type': 'checkbox'}
        if match.group('state').lower() == 'x':
            attrib['checked'] = 'checked'
        attrib['disabled'] = 'disabled'

        checkbox = ElementTree.Element('input', attrib)
        checkbox.tail = ' ' + target.text[match.end():]
        target.text = None
        target.insert(0, checkbox)

        li.set('class', TASK_ITEM_CLASS)
        util.set_raw(li, raw)
        return True


class TaskListExtension(markdown.Extension):
    def extendMarkdown(self, md):
        md.treeprocessors.register(
            TaskListTreeprocessor(md), 'mr-task-list', grammar.priority('mr-task-list'))


def makeExtension(**kwargs):
    return TaskListExtension(**kwargs)
