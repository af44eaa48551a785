from . import api, progress as prog
from .options import OptionsError

import argparse
import os.path
import re
import sys


VERSION = '0.1.0'

NAME = 'markrender'  # For errors/warnings


def file_type_binding(s: str):
    match = re.fullmatch(r'\.?(?P<ext>[\w+-]+)=(?P<language>[\w#+.-]+)', s.strip())
    if not match:
        raise argparse.ArgumentTypeError(
            'Must have the form EXT=LANGUAGE (e.g., vue=html)')
    return match['ext'], match['language']


def main(argv = None):
    parser = argparse.ArgumentParser(
        prog        = 'markrender',
        description = ('Render a .md (markdown) file to an HTML fragment, with task lists, '
                       'footnotes, math, highlighted code and diagram containers.'),
        formatter_class = argparse.RawDescriptionHelpFormatter)

    parser.add_argument(
        '-v', '--version', action = 'version',
        version = f'markrender {VERSION}')

    parser.add_argument(
        'input', metavar = 'INPUT.md', type = str,
        help = 'Input markdown (.md) file')

    parser.add_argument(
        '-o', '--output', metavar = 'OUTPUT.html', type = str,
        help = 'Output HTML file. (By default, the HTML is written to standard output.)')

    parser.add_argument(
        '--no-highlight', action = 'store_true',
        help = 'Leave code blocks unhighlighted (HTML-escaped only).')

    parser.add_argument(
        '--all-languages', action = 'store_true',
        help = ('Highlight every language Pygments knows, not just the common ones (see '
                'README.md).'))

    parser.add_argument(
        '--file-type', metavar = 'EXT=LANGUAGE', type = file_type_binding, action = 'append',
        help = ('Treat code blocks tagged EXT as LANGUAGE, for highlighting purposes. May be '
                'given more than once.'))

    args = parser.parse_args(argv)
    progress = prog.Progress()

    try:
        renderer = api.MarkdownRenderer(
            highlight = not args.no_highlight,
            load_additional_languages = args.all_languages,
            dynamic_file_types = {ext: {'language': lang} for ext, lang in args.file_type or []},
            progress = progress)

    except OptionsError as e:
        progress.error(NAME, msg = str(e))
        return 2

    try:
        html = renderer.render_file_sync(args.input)
    except api.MarkdownFileError as e:
        progress.error(NAME, msg = str(e))
        return 1

    if args.output:
        target_file = os.path.abspath(args.output)
        try:
            with open(target_file, 'w', encoding = 'utf-8') as f:
                f.write(html)
                f.write('\n')
        except OSError as e:
            progress.error(NAME, msg = f'cannot write output "{target_file}": {e}')
            return 1
        progress.progress(NAME, msg = f'wrote "{target_file}"')
    else:
        sys.stdout.write(html + '\n')

    return 1 if progress.get_errors() else 0


if __name__ == '__main__':
    sys.exit(main())
