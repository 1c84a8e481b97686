from markdown_it import MarkdownIt


def _render_link_open(self, tokens, idx, options, env):
    tokens[idx].attrSet("target", "_blank")
    tokens[idx].attrSet("rel", "noopener noreferrer")
    return self.renderToken(tokens, idx, options, env)


def create_renderer() -> MarkdownIt:
    """
    CommonMark renderer with raw HTML escaped. Links with unsafe schemes
    (javascript:, vbscript:, file:, most data:) are rejected by markdown-it's
    link validator and left as text.
    """
    md = MarkdownIt("commonmark", {"html": False}).enable(["table", "strikethrough"])
    md.add_render_rule("link_open", _render_link_open)
    return md


_renderer = create_renderer()


def render_markdown(text: str) -> str:
    if not text:
        return ""
    return _renderer.render(text)
