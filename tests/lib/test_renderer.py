from ..util.mock_progress import MockProgress
from markrender.lib import annotator
from markrender.lib.document import InvalidDocumentError, NodeType
from markrender.lib.highlighting import Highlighter, LanguageRegistry
from markrender.lib.lexer import Lexer
from markrender.lib.options import RendererOptions
from markrender.lib.renderer import TreeRenderer

import unittest
from unittest.mock import Mock
from hamcrest import *

import lxml.html

import dataclasses
from textwrap import dedent


class TreeRendererTestCase(unittest.TestCase):

    def setUp(self):
        self.progress = MockProgress()


    def document(self, markdown_text):
        return annotator.annotate(Lexer().tokenize(dedent(markdown_text).strip()))


    def renderer(self, highlighter = None, **options):
        options = RendererOptions(**options)
        return TreeRenderer(
            options,
            highlighter or Highlighter(LanguageRegistry(options, self.progress)),
            self.progress)


    def parse_html(self, html):
        return lxml.html.fragment_fromstring(html, create_parent = 'div')


    def test_contract_errors(self):
        renderer = self.renderer()
        for bad in [None, '# Not a document', Lexer().tokenize('# Unannotated')]:
            with self.subTest(bad = bad):
                self.assertRaises(InvalidDocumentError, renderer.render, bad)

        document = self.document('# Fine')
        self.assertRaises(InvalidDocumentError, renderer.render,
                          dataclasses.replace(document, root = None))


    def test_empty(self):
        self.assertEqual('', self.renderer().render(self.document('')))


    def test_deterministic(self):
        document = self.document(
            r'''
            # Title

            ```mermaid
            graph TD; A-->B
            ```

            ```python
            print(1)
            ```

            Math $x$ and note[^n].

            [^n]: Note.
            ''')

        renderer = self.renderer()
        first = renderer.render(document)
        self.assertEqual(first, renderer.render(document))
        self.assertEqual(first, self.renderer().render(self.document(
            r'''
            # Title

            ```mermaid
            graph TD; A-->B
            ```

            ```python
            print(1)
            ```

            Math $x$ and note[^n].

            [^n]: Note.
            ''')))


    def test_document_unchanged(self):
        document = self.document('$x$\n\n```mermaid\nA\n```')
        before = [(n.type, n.path, n.element.tag, n.element.text) for n in document.walk()]
        self.renderer().render(document)
        after = [(n.type, n.path, n.element.tag, n.element.text) for n in document.walk()]
        self.assertEqual(before, after)


    def test_diagrams(self):
        html = self.renderer().render(self.document(
            r'''
            ```mermaid
            graph TD; A-->B
            ```

            ```mermaid
            sequenceDiagram
            A->>B: <hi>
            ```
            '''))

        root = self.parse_html(html)
        diagrams = root.xpath('//div[@class="mermaid"]')
        self.assertEqual(['mermaid-diagram-0', 'mermaid-diagram-1'], [d.get('id') for d in diagrams])
        self.assertEqual('graph TD; A-->B', diagrams[0].text)
        self.assertEqual('sequenceDiagram\nA->>B: <hi>', diagrams[1].text)
        assert_that(root.xpath('//pre'), empty())
        self.assertIn('A-&gt;&gt;B: &lt;hi&gt;', html)


    def test_highlighted_code(self):
        html = self.renderer().render(self.document(
            r'''
            ```python
            def f(): return 1
            ```
            '''))

        root = self.parse_html(html)
        code = root.xpath('//pre/code')[0]
        self.assertEqual('language-python', code.get('class'))
        assert_that(code.xpath('./span'), is_not(empty()))
        self.assertEqual('def f(): return 1', code.text_content().strip())


    def test_unrecognised_language(self):
        html = self.renderer().render(self.document('```unknownlang\n<hello> & bye\n```'))
        self.assertRegex(
            html,
            r'<pre><code class="language-unknownlang">&lt;hello&gt; &amp; bye\s*</code></pre>')


    def test_highlighting_disabled(self):
        html = self.renderer(highlight = False).render(self.document('```python\nx = 1\n```'))
        self.assertRegex(html, r'<pre><code class="language-python">x = 1\s*</code></pre>')


    def test_highlighter_failure(self):
        highlighter = Mock()
        highlighter.highlight.side_effect = RuntimeError('broken')

        html = self.renderer(highlighter = highlighter).render(
            self.document('```python\nx < 1\n```'))

        self.assertRegex(html, r'<pre><code class="language-python">x &lt; 1\s*</code></pre>')
        assert_that(self.progress.warning_messages, has_length(1))
        self.assertIn('broken', self.progress.warning_messages[0].msg)


    def test_indented_code(self):
        html = self.renderer().render(self.document('Para\n\n    a < b && c'))
        self.assertRegex(html, r'<pre><code>a &lt; b &amp;&amp; c\s*</code></pre>')


    def test_math_placeholders(self):
        document = self.document(
            r'''
            Inline $a$ here.

            $$
            b
            $$

            ```math
            c
            ```
            ''')

        html = self.renderer().render(document)
        self.assertIn('<span class="math math-inline">\x02mr-math:0\x03</span>', html)
        self.assertIn('<div class="math math-block">\x02mr-math:1\x03</div>', html)
        self.assertIn('<div class="math math-block">\x02mr-math:2\x03</div>', html)
        self.assertNotIn('<pre', html)


    def test_bookkeeping_attributes_removed(self):
        html = self.renderer().render(self.document(
            '- [x] ==a== ~b~ ^c^ :fire: $d$\n\n```\ncode\n```'))
        self.assertNotIn('data-mr-', html)


    def test_escapes_restored(self):
        html = self.renderer().render(self.document(r'Costs \$5 and \*not em\*'))
        self.assertEqual('<p>Costs $5 and *not em*</p>', html)


    def test_raw_html_passthrough(self):
        html = self.renderer().render(self.document(
            r'''
            <div class="custom" onclick="x()"><b>Raw</b> & unescaped</div>

            After
            '''))

        self.assertIn('<div class="custom" onclick="x()"><b>Raw</b> & unescaped</div>', html)


    def test_task_list(self):
        html = self.renderer().render(self.document('- [x] Done\n- [ ] Todo'))
        root = self.parse_html(html)
        boxes = root.xpath('//li[@class="task-list-item"]/input[@type="checkbox"]')
        self.assertEqual([True, False], ['checked' in b.attrib for b in boxes])


    def test_loose_task_list(self):
        document = self.document('- [x] Done\n\n- [ ] Todo')
        self.assertEqual([True, False],
                         [item.checked for item in document.find_all(NodeType.TASK_ITEM)])

        root = self.parse_html(self.renderer().render(document))
        assert_that(root.xpath('//li/input'), empty())
        boxes = root.xpath('//li[@class="task-list-item"]/p/input[@type="checkbox"]')
        self.assertEqual([True, False], ['checked' in b.attrib for b in boxes])


    def test_footnote_numbering(self):
        html = self.renderer().render(self.document(
            r'''
            First[^b], second[^a], again[^b].

            [^a]: Note A.
            [^b]: Note B.
            '''))

        root = self.parse_html(html)
        self.assertEqual(['1', '2', '1'], root.xpath('//sup/a[@class="footnote-ref"]/text()'))
        self.assertEqual(['fn:b', 'fn:a'], root.xpath('//div[@class="footnote"]//li/@id'))


    def test_table_alignment(self):
        html = self.renderer().render(self.document(
            r'''
            | Left | Centre | Right |
            |:-----|:------:|------:|
            | a    | b      | c     |
            | d    | e      | f     |
            '''))

        root = self.parse_html(html)
        for row in root.xpath('//tr'):
            cells = row.xpath('./th|./td')
            self.assertEqual(
                ['text-align:left', 'text-align:center', 'text-align:right'],
                [cell.get('style') for cell in cells])


    def test_video_link_rel(self):
        html = self.renderer().render(self.document(
            '@[youtube-thumbnail](https://youtu.be/abc)'))
        link = self.parse_html(html).xpath('//a')[0]
        self.assertEqual('_blank', link.get('target'))
        self.assertEqual('noopener noreferrer', link.get('rel'))
