'''
Logging/error handling infrastructure.

Messages go to the console (stderr, so that rendered HTML can be piped from stdout). Errors can
also be turned into an HTML panel, which is how a failed render still produces a visible result.
'''

from dataclasses import dataclass
import html
import io
import sys
import traceback
from typing import List, Optional


RESET = '\033[0m'
DETAILS_COLOUR = '\033[30;1m'


@dataclass
class Details:
    title: str
    content: str


class Message:
    def __init__(self, location: str, msg: str, details_list: Optional[List[Details]] = None):
        self._location = location
        self._msg = msg
        self._details_list = details_list or []

    @property
    def location(self):
        return self._location

    @property
    def msg(self):
        return self._msg

    def print(self, file = None):
        file = file or sys.stderr
        print(f'{self.LOCATION_COLOUR}{self.TAG}{self._location}:{RESET} {self.MSG_COLOUR}{self._msg}{RESET}',
              file = file)

        for details in self._details_list:
            print(f'  {DETAILS_COLOUR}{details.title}:{RESET}', file = file)
            for line in details.content.rstrip().splitlines():
                print(f'    {line}', file = file)


class ProgressMsg(Message):
    LOCATION_COLOUR = '\033[32m'
    MSG_COLOUR = ''
    TAG = ''

class WarningMsg(Message):
    LOCATION_COLOUR = '\033[33;1m'
    MSG_COLOUR = '\033[37;1m'
    TAG = '[!] '

class ErrorMsg(Message):
    LOCATION_COLOUR = '\033[31;1m'
    MSG_COLOUR = '\033[37;1m'
    TAG = '[!!] '

    PANEL_CLASS = 'error'

    PANEL_STYLE = 'background: #b33; color: white; padding: 0.5em; border-radius: 2mm;'
    LOCATION_STYLE = 'color: yellow; font-weight: bold;'
    LISTING_STYLE = (
        'background: rgba(255, 255, 255, 0.8); color: black; padding: 0.5em; '
        'overflow: auto; font-family: monospace; margin: 0.5em 0 0 0;'
    )

    def as_html_str(self) -> str:
        '''
        The message as a self-contained <div>, suitable for embedding in a rendered document in
        place of the content that could not be produced.
        '''
        buf = io.StringIO()
        buf.write(f'<div class="{self.PANEL_CLASS}" style="{self.PANEL_STYLE}">')
        buf.write(f'<span style="{self.LOCATION_STYLE}">[!!] {html.escape(self._location)}:</span> ')
        buf.write(html.escape(self._msg))

        for details in self._details_list:
            buf.write(f'<pre style="{self.LISTING_STYLE}" title="{html.escape(details.title)}">')
            buf.write(html.escape(details.content.rstrip()))
            buf.write('</pre>')

        buf.write('</div>')
        return buf.getvalue()


class Progress:
    def __init__(self, quiet = False):
        self._errors = []
        self._quiet = quiet


    def show(self, msg: Message):
        if not self._quiet:
            msg.print()
        if isinstance(msg, ErrorMsg):
            self._errors.append(msg)
        return msg


    def progress(self, location, *, msg):
        return self.show(ProgressMsg(location, msg))


    def warning(self, location, *, msg):
        return self.show(WarningMsg(location, msg))


    def error(self, location, *, msg = None, exception = None):
        details_list = []
        if exception:
            msg = f'{msg}: {str(exception)} ({exception.__class__.__name__})' if msg else str(exception)
            details_list.append(Details('Traceback', ''.join(traceback.format_exception(
                type(exception), exception, exception.__traceback__))))

        elif not msg:
            msg = 'error'

        return self.show(ErrorMsg(location, msg, details_list))


    def get_errors(self):
        return list(self._errors)


    def clear_errors(self):
        self._errors.clear()
