import unittest

import markdown


class ScriptsTestCase(unittest.TestCase):

    def run_markdown(self, markdown_text, other_extensions = [], other_config = {}, **kwargs):
        md = markdown.Markdown(
            extensions = ['markrender.ext.scripts', *other_extensions],
            extension_configs = {'markrender.ext.scripts': kwargs, **other_config}
        )
        return md.convert(markdown_text)


    def test_subscript(self):
        self.assertRegex(self.run_markdown('H~2~O'), r'^<p>H<sub[^>]*>2</sub>O</p>$')


    def test_superscript(self):
        self.assertRegex(self.run_markdown('x^2^ + y^10^'),
                         r'^<p>x<sup[^>]*>2</sup> \+ y<sup[^>]*>10</sup></p>$')


    def test_emphasis_inside(self):
        self.assertRegex(self.run_markdown('a^*b*^'), r'^<p>a<sup[^>]*><em>b</em></sup></p>$')


    def test_strikethrough_wins(self):
        html = self.run_markdown(
            'a ~~deleted~~ b',
            other_extensions = ['pymdownx.tilde'],
            other_config = {'pymdownx.tilde': {'subscript': False}})

        self.assertEqual('<p>a <del>deleted</del> b</p>', html)


    def test_doubled_delimiters_ignored(self):
        for text in ['a ~~b~~ c', 'a ^^b^^ c', 'a ~ b', 'line~one\ntwo~']:
            with self.subTest(text = text):
                html = self.run_markdown(text)
                self.assertNotIn('<sub', html)
                self.assertNotIn('<sup', html)


    def test_config(self):
        html = self.run_markdown('H~2~O and x^2^', subscript = False)
        self.assertNotIn('<sub', html)
        self.assertRegex(html, r'<sup[^>]*>2</sup>')

        html = self.run_markdown('H~2~O and x^2^', superscript = False)
        self.assertRegex(html, r'<sub[^>]*>2</sub>')
        self.assertNotIn('<sup', html)
