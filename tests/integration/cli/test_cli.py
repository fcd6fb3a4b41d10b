"""Integration tests for the mdpress CLI commands"""

import json

import pytest
from typer.testing import CliRunner

from mdpress.cli.cli import app


runner = CliRunner()

POST = """\
---
title: Hello
slug: hello-world
---

# Hello

Some intro text with a picture.

![Chart](charts/a.png)
"""


@pytest.fixture(autouse=True)
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MDPRESS_STORAGE_URL", "https://abc.supabase.co")
    return tmp_path


def test_render_writes_html_and_sidecar(workdir):
    """render produces <slug>.html and <slug>.json named after the frontmatter slug."""
    (workdir / "post.md").write_text(POST)
    result = runner.invoke(app, ["render", "post.md", "--out-dir", "dist"])

    assert result.exit_code == 0, result.output
    assert "Rendered 1 document(s)" in result.output
    html = (workdir / "dist" / "hello-world.html").read_text()
    assert html.startswith('<h1 id="hello">Hello</h1>')
    assert "https://abc.supabase.co/storage/v1/object/public/blog-images/charts/a.png" in html

    sidecar = json.loads((workdir / "dist" / "hello-world.json").read_text())
    assert sidecar["slug"] == "hello-world"
    assert sidecar["path"] == "post.md"
    assert sidecar["frontmatter"]["title"] == "Hello"
    assert sidecar["headings"] == [{"id": "hello", "text": "Hello", "level": 1}]
    assert "content" not in sidecar


def test_render_directory_mirrors_layout(workdir):
    """Nested sources land in matching output subdirectories, slugged from the file name."""
    (workdir / "posts" / "guides").mkdir(parents=True)
    (workdir / "posts" / "Intro Post.md").write_text("# Intro\n")
    (workdir / "posts" / "guides" / "setup.md").write_text("# Setup\n")

    result = runner.invoke(app, ["render", "posts", "--out-dir", "dist"])

    assert result.exit_code == 0, result.output
    assert (workdir / "dist" / "intro-post.html").exists()
    assert (workdir / "dist" / "guides" / "setup.html").exists()
    assert (workdir / "dist" / "guides" / "setup.json").exists()


def test_render_uses_config_output_dir(workdir):
    (workdir / "config.yaml").write_text("output_dir: site\n")
    (workdir / "a.md").write_text("# A\n")
    result = runner.invoke(app, ["render", "a.md"])
    assert result.exit_code == 0, result.output
    assert (workdir / "site" / "a.html").exists()


def test_render_no_excerpt(workdir):
    (workdir / "a.md").write_text("# A\n\nBody.\n")
    result = runner.invoke(app, ["render", "a.md", "--out-dir", "dist", "--no-excerpt"])
    assert result.exit_code == 0, result.output
    assert json.loads((workdir / "dist" / "a.json").read_text())["excerpt"] is None


def test_render_line_numbers(workdir):
    (workdir / "a.md").write_text("```python\nx = 1\ny = 2\n```\n")
    result = runner.invoke(app, ["render", "a.md", "--out-dir", "dist", "--line-numbers"])
    assert result.exit_code == 0, result.output
    assert 'data-line-count="2"' in (workdir / "dist" / "a.html").read_text()


def test_render_without_storage_fails(workdir, monkeypatch):
    """A relative image with no storage configured exits 1 with a clear message."""
    monkeypatch.delenv("MDPRESS_STORAGE_URL")
    (workdir / "post.md").write_text(POST)
    result = runner.invoke(app, ["render", "post.md", "--out-dir", "dist"])
    assert result.exit_code == 1
    assert "Image storage is not configured" in result.output


def test_render_invalid_config(workdir):
    (workdir / "config.yaml").write_text("key: [unclosed\n")
    (workdir / "a.md").write_text("# A\n")
    result = runner.invoke(app, ["render", "a.md"])
    assert result.exit_code == 1
    assert "Invalid config.yaml" in result.output


def test_preview_prints_plain_html(workdir):
    (workdir / "a.md").write_text("# Title\n\nText.\n")
    result = runner.invoke(app, ["preview", "a.md"])
    assert result.exit_code == 0, result.output
    assert "<h1>Title</h1>\n<p>Text.</p>" in result.output


def test_preview_missing_file(workdir):
    result = runner.invoke(app, ["preview", "missing.md"])
    assert result.exit_code == 1
    assert "Not a file" in result.output


def test_validate_ok(workdir):
    (workdir / "a.md").write_text("# Fine\n\n[link](https://x.io)\n")
    result = runner.invoke(app, ["validate", "a.md"])
    assert result.exit_code == 0
    assert "OK" in result.output


def test_validate_reports_errors(workdir):
    (workdir / "a.md").write_text("```js\nno close\n[broken](x\n")
    result = runner.invoke(app, ["validate", "a.md"])
    assert result.exit_code == 1
    assert "Unclosed code block detected" in result.output
    assert "Broken link syntax" in result.output


def test_sanitize_prints_cleaned(workdir):
    (workdir / "a.md").write_text("Hi<script>x()</script>\n")
    result = runner.invoke(app, ["sanitize", "a.md"])
    assert result.exit_code == 0
    assert result.output == "Hi\n"


def test_sanitize_in_place(workdir):
    path = workdir / "a.md"
    path.write_text('<a href="javascript:go()" onclick="x()">x</a>\n')
    result = runner.invoke(app, ["sanitize", "a.md", "--in-place"])
    assert result.exit_code == 0, result.output
    assert "Sanitized" in result.output
    assert path.read_text() == '<a href="go()">x</a>\n'
