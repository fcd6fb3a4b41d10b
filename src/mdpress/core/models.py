"""Public data models for pipeline options, results, and diagnostics"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProcessOptions(BaseModel):
    """Knobs for a single process_markdown call."""
    generate_excerpt:     bool = True
    excerpt_length:       int  = Field(default=160, ge=1)
    transform_image_urls: bool = True
    callouts:             bool = True
    footnotes:            bool = True
    line_numbers:         bool = False
    highlight:            bool = True
    detect_language:      bool = True
    gfm:                  bool = True
    sanitize:             bool = False
    toc_max_level:        int  = Field(default=3, ge=1, le=6)
    words_per_minute:     int  = Field(default=225, ge=1)


class HeadingRecord(BaseModel):
    """A heading collected in document order."""
    id:    str
    text:  str
    level: int


class TocNode(BaseModel):
    """One entry of the nested table of contents."""
    id:       str
    text:     str
    level:    int
    children: list["TocNode"] = Field(default_factory=list)


class FootnoteEntry(BaseModel):
    id:      str            # fn-1, fn-2, ...
    content: str


class PipelineResult(BaseModel):
    """Render-ready output of process_markdown; immutable once returned."""
    model_config = ConfigDict(frozen=True)

    content:           str
    frontmatter:       dict[str, Any] = Field(default_factory=dict)
    reading_time:      int
    word_count:        int
    headings:          list[HeadingRecord] = Field(default_factory=list)
    table_of_contents: list[TocNode] = Field(default_factory=list)
    excerpt:           Optional[str] = None


class ProcessOutcome(BaseModel):
    """Typed success/failure wrapper returned by process_markdown_safely."""
    model_config = ConfigDict(frozen=True)

    ok:       bool
    result:   Optional[PipelineResult] = None
    error:    Optional[str] = None
    fallback: Optional[str] = None  # escaped raw source shown instead of an empty page


class ValidationReport(BaseModel):
    is_valid: bool
    errors:   list[str] = Field(default_factory=list)
