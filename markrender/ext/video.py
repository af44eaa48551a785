'''
# Video Thumbnail Extension

@[youtube-thumbnail](URL) becomes a thumbnail image linking to the video:

    <a href="URL" class="youtube-thumbnail-link" target="_blank">
      <img src="https://img.youtube.com/vi/ID/0.jpg" alt="YouTube Video Thumbnail"
           class="youtube-thumbnail-image">
    </a>

The video ID comes from 'watch?v=ID' or 'youtu.be/ID' in the URL. If there isn't one, the syntax
is not recognised, and '[youtube-thumbnail](URL)' is left for the ordinary link processor.
'''

from ..lib import grammar
from . import util

import markdown

import re
from typing import Optional
from xml.etree import ElementTree


NAME = 'mr.video'

VIDEO_RE = r'@\[youtube-thumbnail\]\((?P<url>[^)\s]+)\)'

VIDEO_ID_RE = re.compile(r'(?:youtube\.com/watch\?v=|youtu\.be/)(?P<id>[^&?/#\s]+)', re.IGNORECASE)

THUMBNAIL_URL = 'https://img.youtube.com/vi/{id}/0.jpg'


def video_id(url: str) -> Optional[str]:
    match = VIDEO_ID_RE.search(url)
    return match.group('id') if match else None


class VideoThumbnailProcessor(markdown.inlinepatterns.InlineProcessor):
    def handleMatch(self, match, data):
        url = match.group('url')
        vid = video_id(url)
        if not vid:
            return None, None, None

        link = ElementTree.Element('a', {
            'href': url,
            'class': 'youtube-thumbnail-link',
            'target': '_blank',
        })
        ElementTree.SubElement(link, 'img', {
            'src': THUMBNAIL_URL.format(id = vid),
            'alt': 'YouTube Video Thumbnail',
            'class': 'youtube-thumbnail-image',
        })
        util.set_raw(link, match.group(0))
        return link, match.start(0), match.end(0)


class VideoExtension(markdown.Extension):
    def extendMarkdown(self, md):
        md.inlinePatterns.register(
            VideoThumbnailProcessor(VIDEO_RE, md),
            'mr-video-thumbnail', grammar.priority('mr-video-thumbnail'))


def makeExtension(**kwargs):
    return VideoExtension(**kwargs)
