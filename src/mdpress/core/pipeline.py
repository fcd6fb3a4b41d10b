"""Markdown processing pipeline: full render with metadata, and a fast preview path"""

import html
import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, Optional

from mdpress.core.models import FootnoteEntry, HeadingRecord, PipelineResult, ProcessOptions, ProcessOutcome
from mdpress.core.nodes import Root
from mdpress.core.parse import parse_markdown, split_frontmatter
from mdpress.core.render.convert import to_hast
from mdpress.core.render.hast import to_html
from mdpress.core.storage import ImageResolver, StorageConfigError, make_storage_resolver
from mdpress.core.toc import build_table_of_contents
from mdpress.core.transforms.callouts import expand_callouts
from mdpress.core.transforms.code import decorate_code_blocks
from mdpress.core.transforms.footnotes import process_footnotes
from mdpress.core.transforms.headings import collect_headings
from mdpress.core.transforms.images import rewrite_image_urls
from mdpress.core.transforms.youtube import embed_youtube
from mdpress.core.utils.text import count_words, generate_excerpt, reading_time
from mdpress.core.validate import sanitize_markdown


logger = logging.getLogger(__name__)

Stage = tuple[str, Callable[[Root], Root]]

# Fixed stage order for the full pipeline. Headings are collected before any
# stage that could rely on heading ids; footnotes prune the tree once, after
# their own visits; code hints are attached last, right before rendering.
STAGE_ORDER = ('youtube', 'callouts', 'image-urls', 'headings', 'footnotes', 'code-blocks')


@dataclass
class RunState:
    """Accumulators owned by a single process_markdown call."""
    headings:  list[HeadingRecord] = field(default_factory=list)
    footnotes: list[FootnoteEntry] = field(default_factory=list)


def build_stages(options: ProcessOptions, state: RunState, resolve_image: ImageResolver) -> list[Stage]:
    """Return the enabled (name, pass) pairs in STAGE_ORDER, bound to this run's state."""
    available: dict[str, Optional[Callable[[Root], Root]]] = {
        'youtube':     embed_youtube,
        'callouts':    expand_callouts if options.callouts else None,
        'image-urls':  partial(rewrite_image_urls, resolve=resolve_image) if options.transform_image_urls else None,
        'headings':    partial(collect_headings, headings=state.headings, skip_footnotes=options.footnotes),
        'footnotes':   partial(process_footnotes, entries=state.footnotes) if options.footnotes else None,
        'code-blocks': partial(decorate_code_blocks, line_numbers=options.line_numbers),
    }
    return [(name, available[name]) for name in STAGE_ORDER if available[name] is not None]


def _excerpt(frontmatter: dict[str, Any], body: str, options: ProcessOptions) -> Optional[str]:
    if frontmatter.get('excerpt'):
        return str(frontmatter['excerpt'])
    if options.generate_excerpt:
        return generate_excerpt(body, options.excerpt_length) or None
    return None


def process_markdown(
    markdown: str,
    options: Optional[ProcessOptions] = None,
    resolve_image: Optional[ImageResolver] = None,
    ) -> PipelineResult:
    """Render markdown (with optional frontmatter) to HTML plus reading metadata.

    Steps: split frontmatter, count words, parse, run the transform stages,
    convert to a render tree, serialize, then build the TOC and excerpt.
    StorageConfigError from the image resolver propagates.
    """
    options = options or ProcessOptions()
    frontmatter, body = split_frontmatter(markdown)
    if options.sanitize:
        body = sanitize_markdown(body)

    word_count = count_words(body)
    tree = parse_markdown(body, gfm=options.gfm)

    state = RunState()
    for name, stage in build_stages(options, state, resolve_image or make_storage_resolver()):
        logger.debug("Running %s stage", name)
        tree = stage(tree)

    hast = to_hast(tree, heading_ids=True, highlight=options.highlight, detect_language=options.detect_language)
    return PipelineResult(
        content=to_html(hast, allow_raw=True),
        frontmatter=frontmatter,
        reading_time=reading_time(word_count, options.words_per_minute),
        word_count=word_count,
        headings=state.headings,
        table_of_contents=build_table_of_contents(state.headings, max_level=options.toc_max_level),
        excerpt=_excerpt(frontmatter, body, options),
    )


def process_markdown_preview(markdown: str, gfm: bool = True) -> str:
    """Parse, convert, and serialize only: no custom stages, ids, highlighting, or metadata."""
    tree = parse_markdown(markdown, gfm=gfm)
    return to_html(to_hast(tree, heading_ids=False, highlight=False), allow_raw=True)


def source_fallback_html(markdown: str) -> str:
    """Escaped raw source, shown when a document cannot be rendered."""
    return f'<pre class="markdown-source">{html.escape(markdown, quote=False)}</pre>'


def process_markdown_safely(
    markdown: str,
    options: Optional[ProcessOptions] = None,
    resolve_image: Optional[ImageResolver] = None,
    ) -> ProcessOutcome:
    """process_markdown for request handlers: unexpected faults become a failed outcome.

    Storage misconfiguration is not a document fault and is re-raised.
    """
    try:
        result = process_markdown(markdown, options, resolve_image)
    except StorageConfigError:
        raise
    except Exception as e:
        logger.exception("Markdown processing failed")
        return ProcessOutcome(ok=False, error=str(e) or type(e).__name__, fallback=source_fallback_html(markdown))
    return ProcessOutcome(ok=True, result=result)


def render_preview_safely(markdown: str, gfm: bool = True) -> str:
    """Preview HTML, or a visible inline error block instead of an empty page."""
    try:
        return process_markdown_preview(markdown, gfm=gfm)
    except Exception as e:
        logger.exception("Preview rendering failed")
        return f'<div class="markdown-error" role="alert">Preview failed: {html.escape(str(e))}</div>'
