import unittest

import markdown


class MarkTestCase(unittest.TestCase):

    def run_markdown(self, markdown_text):
        md = markdown.Markdown(extensions = ['markrender.ext.mark'])
        return md.convert(markdown_text)


    def test_mark(self):
        self.assertRegex(self.run_markdown('A ==highlighted== word'),
                         r'^<p>A <mark[^>]*>highlighted</mark> word</p>$')


    def test_shortest_span(self):
        html = self.run_markdown('==one== and ==two==')
        self.assertRegex(html, r'<mark[^>]*>one</mark> and <mark[^>]*>two</mark>')


    def test_emphasis_inside(self):
        self.assertRegex(self.run_markdown('==*both*=='), r'<mark[^>]*><em>both</em></mark>')


    def test_not_mark(self):
        for text in ['a == b', '===x===', '==  ==', '==across\nlines==']:
            with self.subTest(text = text):
                self.assertNotIn('<mark', self.run_markdown(text))
