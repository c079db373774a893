"""Markdown rendering for mentor replies."""

import html
import re

_CODE_BLOCK = re.compile(r"```(\w*)\n?([\s\S]*?)```")
_INLINE_CODE = re.compile(r"`([^`]+)`")
_LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_BULLET = re.compile(r"^[-*]\s+")
_NUMBERED = re.compile(r"^\d+\.\s+")

_INLINE_RULES = [
    (re.compile(r"\*\*(.+?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"__(.+?)__"), r"<strong>\1</strong>"),
    (re.compile(r"\*([^*\n]+)\*"), r"<em>\1</em>"),
    (re.compile(r"(?<!\w)_([^_\n]+)_(?!\w)"), r"<em>\1</em>"),
]


def _wrap_lists(lines: list[str], marker: re.Pattern[str], tag: str, css: str) -> list[str]:
    """Group consecutive lines starting with ``marker`` into one list element."""
    result: list[str] = []
    in_list = False
    for line in lines:
        stripped = line.strip()
        if marker.match(stripped):
            if not in_list:
                result.append(f'<{tag} class="{css}">')
                in_list = True
            result.append(f"<li>{marker.sub('', stripped)}</li>")
            continue
        if in_list:
            result.append(f"</{tag}>")
            in_list = False
        result.append(line)
    if in_list:
        result.append(f"</{tag}>")
    return result


def markdown_to_html(text: str) -> str:
    """Convert a mentor reply to HTML for the chat bubble.

    Supports: code blocks, inline code, bold, italic, links, bullet and numbered lists.
    Input is HTML-escaped first, so model output can never inject markup.
    """
    text = html.escape(text, quote=False)

    text = _CODE_BLOCK.sub(
        r'<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs">'
        r"<code>\2</code></pre>",
        text,
    )
    text = _INLINE_CODE.sub(
        r'<code class="bg-gray-200 text-pink-600 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )
    for pattern, replacement in _INLINE_RULES:
        text = pattern.sub(replacement, text)
    text = _LINK.sub(r'<a href="\2" class="underline" target="_blank">\1</a>', text)

    lines = text.split("\n")
    lines = _wrap_lists(lines, _BULLET, "ul", "list-disc list-inside my-2 space-y-1")
    lines = _wrap_lists(lines, _NUMBERED, "ol", "list-decimal list-inside my-2 space-y-1")

    # Block tags already break lines; only plain lines get <br>
    out: list[str] = []
    for i, line in enumerate(lines):
        out.append(line)
        if i < len(lines) - 1 and not re.search(r"</?(ul|ol|li)[^>]*>$", line):
            out.append("<br>")
    return "".join(out)
