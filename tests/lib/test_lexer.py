from markrender.lib.lexer import Lexer
from markrender.lib.document import Document, NodeType

import unittest
from hamcrest import *

import sys
from textwrap import dedent


class LexerTestCase(unittest.TestCase):

    def tokenize(self, markdown_text):
        return Lexer().tokenize(dedent(markdown_text).strip())


    def types(self, nodes):
        return [node.type for node in nodes]


    def test_empty(self):
        for text in ['', '   ', '\n\n', None]:
            with self.subTest(text = text):
                document = Lexer().tokenize(text)
                self.assertIsInstance(document, Document)
                assert_that(document.children, empty())


    def test_top_level_blocks(self):
        document = self.tokenize(
            r'''
            # Heading

            Paragraph

            - item

            > quote

            ---

            ```python
            x = 1
            ```

            $$
            y = 2
            $$

            | a | b |
            |---|---|
            | 1 | 2 |
            ''')

        assert_that(self.types(document.children), contains_exactly(
            NodeType.HEADING,
            NodeType.PARAGRAPH,
            NodeType.LIST,
            NodeType.BLOCK_QUOTE,
            NodeType.THEMATIC_BREAK,
            NodeType.CODE_BLOCK,
            NodeType.MATH_BLOCK,
            NodeType.TABLE,
        ))


    def test_headings(self):
        document = self.tokenize('# H1\n## H2\n### H3\n#### H4\n##### H5\n###### H6')
        headings = document.find_all(NodeType.HEADING)
        self.assertEqual([1, 2, 3, 4, 5, 6], [h.level for h in headings])


    def test_inline_nodes(self):
        document = self.tokenize(
            r'''
            *em* `code` [link](http://a.b) ![img](x.png) H~2~O x^2^ ==hi== :fire: $m$
            @[youtube-thumbnail](https://youtu.be/abc)
            ''')

        paragraph = document.children[0]
        inline_types = [n.type for n in paragraph.children if n.type != NodeType.TEXT]
        assert_that(inline_types, contains_exactly(
            NodeType.EMPHASIS,
            NodeType.CODE_SPAN,
            NodeType.LINK,
            NodeType.IMAGE,
            NodeType.SUBSCRIPT,
            NodeType.SUPERSCRIPT,
            NodeType.HIGHLIGHT,
            NodeType.EMOJI,
            NodeType.MATH_INLINE,
            NodeType.VIDEO_THUMBNAIL,
        ))

        by_type = {n.type: n for n in paragraph.children}
        self.assertEqual('http://a.b', by_type[NodeType.LINK].url)
        self.assertEqual('x.png', by_type[NodeType.IMAGE].url)
        self.assertEqual('fire', by_type[NodeType.EMOJI].name)
        self.assertEqual('m', by_type[NodeType.MATH_INLINE].content)
        self.assertFalse(by_type[NodeType.MATH_INLINE].display_mode)
        self.assertEqual('abc', by_type[NodeType.VIDEO_THUMBNAIL].video_id)
        self.assertEqual('==hi==', by_type[NodeType.HIGHLIGHT].raw)


    def test_code_block(self):
        document = self.tokenize(
            r'''
            ```Python
            print("hi")
            ```
            ''')

        code = document.children[0]
        self.assertEqual(NodeType.CODE_BLOCK, code.type)
        self.assertEqual('python', code.language)
        self.assertEqual('print("hi")', code.text)
        self.assertEqual('```Python\nprint("hi")\n```', code.raw)


    def test_task_items(self):
        document = self.tokenize('- [x] Done\n- [ ] Todo\n- Plain')
        items = document.children[0].children
        assert_that(self.types(items), contains_exactly(
            NodeType.TASK_ITEM, NodeType.TASK_ITEM, NodeType.LIST_ITEM))
        self.assertEqual([True, False, None], [item.checked for item in items])


    def test_footnotes(self):
        document = self.tokenize(
            r'''
            Text[^a].

            [^a]: The note.
            ''')

        assert_that(document.find_all(NodeType.FOOTNOTE_REFERENCE), has_length(1))
        assert_that(document.find_all(NodeType.FOOTNOTE_SECTION), has_length(1))
        assert_that(document.find_all(NodeType.FOOTNOTE_DEFINITION), has_length(1))


    def test_raw_html(self):
        document = self.tokenize(
            r'''
            <div class="custom">Raw *html*</div>

            Paragraph
            ''')

        raw = document.children[0]
        self.assertEqual(NodeType.RAW_HTML, raw.type)
        self.assertEqual('<div class="custom">Raw *html*</div>', raw.raw.strip())
        self.assertEqual(NodeType.PARAGRAPH, document.children[1].type)


    def test_line_breaks_and_heading_ids(self):
        document = self.tokenize('# My Title\n\nline *one*\nline two')
        heading, paragraph = document.children
        self.assertEqual('my-title', heading.element.get('id'))

        # <br> has no node of its own; the text either side of it does.
        self.assertEqual(['br'], [e.tag for e in paragraph.element.iter('br')])
        self.assertEqual(
            [(NodeType.TEXT, 'line'), (NodeType.EMPHASIS, None), (NodeType.TEXT, 'line two')],
            [(n.type, n.value.strip() if n.type == NodeType.TEXT else None)
             for n in paragraph.children])


    def test_newlines(self):
        document = Lexer().tokenize('# A\r\n\r\nPara one\rstill one\n\nPara two')
        assert_that(self.types(document.children), contains_exactly(
            NodeType.HEADING, NodeType.PARAGRAPH, NodeType.PARAGRAPH))


    def test_malformed_syntax_is_text(self):
        document = self.tokenize(
            r'''
            ```python
            never closed

            $$
            also never closed
            ''')

        assert_that(document.find_all(NodeType.CODE_BLOCK), empty())
        assert_that(document.find_all(NodeType.MATH_BLOCK), empty())
        text = ' '.join(node.value for node in document.find_all(NodeType.TEXT))
        self.assertIn('never closed', text)
        self.assertIn('also never closed', text)


    def test_deep_nesting(self):
        depth = 40
        text = '\n'.join('> ' * level + f'level {level}' for level in range(1, depth + 1))
        document = Lexer().tokenize(text)

        # walk() must cope without recursion.
        quotes = document.find_all(NodeType.BLOCK_QUOTE)
        self.assertEqual(depth, len(quotes))


    def test_nesting_beyond_default_recursion_limit(self):
        limit = sys.getrecursionlimit()

        depth = 300
        document = Lexer().tokenize(
            '\n'.join('    ' * level + f'- item {level}' for level in range(depth)))
        self.assertEqual(depth, len(document.find_all(NodeType.LIST)))
        self.assertEqual(depth, len(document.find_all(NodeType.LIST_ITEM)))

        depth = 1000
        document = Lexer().tokenize('>' * depth + ' deep')
        self.assertEqual(depth, len(document.find_all(NodeType.BLOCK_QUOTE)))
        paragraphs = document.find_all(NodeType.PARAGRAPH)
        self.assertEqual(['deep'], [p.element.text for p in paragraphs])

        self.assertEqual(limit, sys.getrecursionlimit())


    def test_walk_order(self):
        document = self.tokenize(
            r'''
            # Title

            - one *a*
            - two

            End
            ''')

        walked = [(n.type, n.value) for n in document.walk()
                  if n.type in (NodeType.HEADING, NodeType.LIST, NodeType.LIST_ITEM,
                                NodeType.EMPHASIS, NodeType.PARAGRAPH)
                  or (n.type == NodeType.TEXT)]

        assert_that(walked, contains_exactly(
            (NodeType.HEADING, None),
            (NodeType.TEXT, 'Title'),
            (NodeType.LIST, None),
            (NodeType.LIST_ITEM, None),
            (NodeType.TEXT, 'one '),
            (NodeType.EMPHASIS, None),
            (NodeType.TEXT, 'a'),
            (NodeType.LIST_ITEM, None),
            (NodeType.TEXT, 'two'),
            (NodeType.PARAGRAPH, None),
            (NodeType.TEXT, 'End'),
        ))
