"""Export: render markdown files to HTML and sidecar JSON output files"""

import json
from pathlib import Path
from typing import Optional

from mdpress.core.models import PipelineResult, ProcessOptions
from mdpress.core.parse import discover_files
from mdpress.core.pipeline import process_markdown
from mdpress.core.storage import ImageResolver
from mdpress.core.utils.slug import slugify


def build_sidecar(result: PipelineResult, slug: str, path: str) -> dict:
    """Build the sidecar JSON dict: everything in the result except the rendered HTML."""
    data = result.model_dump(mode='json', exclude={'content'})
    return {"slug": slug, "path": path, **data}


def doc_slug(result: PipelineResult, source: Path) -> str:
    """Frontmatter slug when present, else one derived from the file name."""
    return str(result.frontmatter.get('slug') or slugify(source.stem))


def write_post(
    result: PipelineResult,
    source: Path,
    output_dir: Path,
    root: Optional[Path] = None,
    ) -> tuple[Path, Path]:
    """Write <slug>.html + <slug>.json for one rendered document.

    Output path mirrors the source directory relative to root:
      output_dir / source.relative_to(root).parent / slug.{html|json}

    Returns (html_path, json_path).
    """
    rel = source.relative_to(root) if root else Path(source.name)
    dest_dir = output_dir / rel.parent
    dest_dir.mkdir(parents=True, exist_ok=True)

    slug = doc_slug(result, source)
    html_path = dest_dir / f"{slug}.html"
    json_path = dest_dir / f"{slug}.json"

    html_path.write_text(result.content, encoding='utf-8')
    json_path.write_text(
        json.dumps(build_sidecar(result, slug, str(rel)), indent=2, ensure_ascii=False),
        encoding='utf-8',
    )
    return html_path, json_path


def run_render(
    path: Path,
    output_dir: Path,
    options: Optional[ProcessOptions] = None,
    resolve_image: Optional[ImageResolver] = None,
    ) -> list[tuple[Path, Path]]:
    """Render every markdown file under path. Returns (source_path, html_path) pairs."""
    root = path if path.is_dir() else path.parent
    results = []
    for p in discover_files(path):
        result = process_markdown(p.read_text(encoding='utf-8'), options, resolve_image)
        html_path, _ = write_post(result, p, output_dir, root)
        results.append((p, html_path))
    return results
