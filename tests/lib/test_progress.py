from markrender.lib.progress import Progress

import unittest

import contextlib
import io


class ProgressTestCase(unittest.TestCase):

    def test_errors_recorded(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            progress = Progress()
            progress.progress('loc', msg = 'working')
            progress.warning('loc', msg = 'careful')
            self.assertEqual([], progress.get_errors())

            error = progress.error('loc', msg = 'failed')
            self.assertEqual([error], progress.get_errors())

        self.assertIn('working', stderr.getvalue())
        self.assertIn('careful', stderr.getvalue())
        self.assertIn('failed', stderr.getvalue())

        progress.clear_errors()
        self.assertEqual([], progress.get_errors())


    def test_quiet(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            progress = Progress(quiet = True)
            progress.warning('loc', msg = 'careful')
            progress.error('loc', msg = 'failed')

        self.assertEqual('', stderr.getvalue())
        self.assertEqual(1, len(progress.get_errors()))


    def test_error_html(self):
        try:
            raise ValueError('<bad> value')
        except ValueError as e:
            exception = e

        progress = Progress(quiet = True)
        html = progress.error('render<er>', msg = 'Error rendering markdown',
                              exception = exception).as_html_str()

        self.assertTrue(html.startswith('<div class="error"'))
        self.assertTrue(html.endswith('</div>'))
        self.assertIn('render&lt;er&gt;', html)
        self.assertIn('Error rendering markdown: &lt;bad&gt; value (ValueError)', html)
        self.assertIn('title="Traceback"', html)
        self.assertNotIn('<bad>', html)


    def test_error_printed_with_traceback(self):
        try:
            raise ValueError('bad value')
        except ValueError as e:
            exception = e

        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            Progress().error('loc', msg = 'failed', exception = exception)

        output = stderr.getvalue()
        self.assertIn('[!!] loc:', output)
        self.assertIn('failed: bad value (ValueError)', output)
        self.assertIn('Traceback:', output)
        self.assertIn('    ValueError: bad value', output)


    def test_error_without_message(self):
        progress = Progress(quiet = True)
        self.assertEqual('error', progress.error('loc').msg)
        self.assertEqual('just this', progress.error('loc', exception = ValueError('just this')).msg)
