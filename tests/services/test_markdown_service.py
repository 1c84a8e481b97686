from app.services.markdown_service import render_markdown


def test_renders_common_markdown():
    html = render_markdown("# Title\n\nSome *text*")

    assert "<h1>Title</h1>" in html
    assert "<em>text</em>" in html


def test_empty_input_renders_empty():
    assert render_markdown("") == ""


def test_raw_html_is_escaped():
    html = render_markdown("<script>alert(1)</script>")

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_links_open_in_new_tab():
    html = render_markdown("[site](https://example.com)")

    assert 'href="https://example.com"' in html
    assert 'target="_blank"' in html
    assert 'rel="noopener noreferrer"' in html


def test_javascript_links_are_not_rendered():
    html = render_markdown("[click](javascript:alert(1))")

    assert "<a" not in html


def test_tables_are_enabled():
    html = render_markdown("| a | b |\n| - | - |\n| 1 | 2 |\n")

    assert "<table>" in html


def test_rendering_is_stable():
    text = "## Heading\n\n- one\n- two\n"
    assert render_markdown(text) == render_markdown(text)
