"""Text-in, text-out helpers for article bodies.

The store only ever hands out raw markdown; turning it into HTML is left to
whoever renders the page.
"""
import frontmatter
import mistune

_render = mistune.create_markdown(escape=True, plugins=["strikethrough", "table", "url"])


def strip_front_matter(text: str) -> str:
    """Drop a leading front-matter block (YAML, TOML or JSON), keep the body."""
    text = text or ""
    handler = frontmatter.detect_format(text, frontmatter.handlers)
    if handler is None:
        return text
    try:
        _, body = handler.split(text)
    except ValueError:
        # opening fence without a closing one: not front-matter after all
        return text
    return body.lstrip("\r\n")


def render_markdown(text: str) -> str:
    return _render(strip_front_matter(text))
