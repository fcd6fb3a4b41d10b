"""Replace standalone YouTube links with responsive iframe embeds"""

import html
import re
from typing import Optional

from mdpress.core.nodes import Html, Link, Paragraph, Parent, Root, Text, visit


BARE_URL_RE = re.compile(
    r'^(https?://)?(www\.)?(youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([a-zA-Z0-9_-]+)(\S*)?$'
)
ID_PATTERNS = [
    re.compile(r'(?:youtube\.com/watch\?v=|youtu\.be/)([^&\n?#]+)'),
    re.compile(r'youtube\.com/embed/([^&\n?#]+)'),
    re.compile(r'youtube\.com/v/([^&\n?#]+)'),
]
THUMBNAIL_QUALITY = {'default': 'default', 'hq': 'hqdefault', 'maxres': 'maxresdefault'}

EMBED_TEMPLATE = (
    '<div class="youtube-embed-container" style="position: relative; padding-bottom: 56.25%; '
    'height: 0; overflow: hidden; max-width: 100%; margin: 2rem 0;">'
    '<iframe src="{src}" title="YouTube video" frameborder="0" '
    'allow="accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture; web-share" '
    'allowfullscreen loading="lazy" '
    'style="position: absolute; top: 0; left: 0; width: 100%; height: 100%; border-radius: 0.5rem;">'
    '</iframe></div>'
)


def extract_youtube_id(url: str) -> Optional[str]:
    """Return the video id from a watch, youtu.be, embed, or /v/ URL, else None."""
    for pattern in ID_PATTERNS:
        m = pattern.search(url)
        if m and m.group(1):
            return m.group(1)
    return None


def youtube_embed_url(video_id: str) -> str:
    return f"https://www.youtube.com/embed/{video_id}"


def youtube_thumbnail_url(video_id: str, quality: str = 'hq') -> str:
    return f"https://img.youtube.com/vi/{video_id}/{THUMBNAIL_QUALITY[quality]}.jpg"


def youtube_embed_html(video_id: str) -> str:
    return EMBED_TEMPLATE.format(src=html.escape(youtube_embed_url(video_id)))


def _paragraph_video_id(node: Paragraph) -> Optional[str]:
    if len(node.children) != 1:
        return None
    child = node.children[0]
    if isinstance(child, Text):
        value = child.value.strip()
        if BARE_URL_RE.match(value):
            return extract_youtube_id(value)
    elif isinstance(child, Link) and child.children:
        return extract_youtube_id(child.url)
    return None


def embed_youtube(tree: Root) -> Root:
    """Swap paragraphs holding only a YouTube URL, and YouTube links outside paragraphs, for embeds."""

    def on_paragraph(node: Paragraph, index: int, parent: Parent) -> None:
        video_id = _paragraph_video_id(node)
        if video_id:
            parent.children[index] = Html(value=youtube_embed_html(video_id))

    def on_link(node: Link, index: int, parent: Parent) -> None:
        if isinstance(parent, Paragraph) or parent.children[index] is not node:
            return
        video_id = extract_youtube_id(node.url)
        if video_id:
            parent.children[index] = Html(value=youtube_embed_html(video_id))

    visit(tree, Paragraph, on_paragraph)
    visit(tree, Link, on_link)
    return tree
