"""Markdown to HTML with highlighted code blocks."""

from __future__ import annotations

import html
import re

from markdown_it import MarkdownIt
from pygments.lexers import get_lexer_by_name
from pygments.lexers.special import TextLexer
from pygments.token import (
    Comment,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
)
from pygments.util import ClassNotFound

__all__ = ["to_html"]

_ABSOLUTE_LINK = re.compile(r"^(?:[a-zA-Z][a-zA-Z0-9+.\-]*:|//)")


def _css_class(ttype, value: str) -> str:
    if value.isspace():
        return ""
    if ttype in Comment:
        return "pl-c"
    if ttype in String:
        return "pl-s1"
    if ttype in Keyword.Type or ttype in Name.Class:
        return "pl-en"
    if ttype in Keyword.Constant:
        return "lit"
    if ttype in Keyword:
        return "pl-k"
    if ttype in Number:
        return "dec"
    if ttype in Punctuation or ttype in Operator:
        return "pun"
    if ttype in Name.Tag:
        return "tag"
    if ttype in Name.Attribute:
        return "atn"
    return "pl-s1"


def _highlight(code: str, language: str) -> str:
    try:
        lexer = get_lexer_by_name(language, stripnl=False, ensurenl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False, ensurenl=False)
    parts = []
    for ttype, value in lexer.get_tokens(code):
        escaped = html.escape(value)
        css = _css_class(ttype, value)
        parts.append(f'<span class="{css}">{escaped}</span>' if css else escaped)
    return "".join(parts)


def _render_code_inline(renderer, tokens, idx, options, env) -> str:
    return f'<pre class="notranslate">{tokens[idx].content}</pre>'


def _render_fence(renderer, tokens, idx, options, env) -> str:
    token = tokens[idx]
    language = token.info.strip().split()[0] if token.info.strip() else ""
    return f'<pre class="notranslate">{_highlight(token.content, language)}</pre>'


def _render_code_block(renderer, tokens, idx, options, env) -> str:
    return f'<pre class="notranslate">{_highlight(tokens[idx].content, "")}</pre>'


def _render_link_open(renderer, tokens, idx, options, env) -> str:
    token = tokens[idx]
    href = str(token.attrGet("href") or "")
    if _ABSOLUTE_LINK.match(href):
        token.attrSet("target", "_blank")
    return renderer.renderToken(tokens, idx, options, env)


def _parser() -> MarkdownIt:
    md = MarkdownIt("commonmark", {"typographer": True})
    md.enable(["table", "strikethrough", "replacements", "smartquotes"])
    md.add_render_rule("code_inline", _render_code_inline)
    md.add_render_rule("fence", _render_fence)
    md.add_render_rule("code_block", _render_code_block)
    md.add_render_rule("link_open", _render_link_open)
    return md


_MD = _parser()


def to_html(text: str) -> str:
    """Render markdown; absolute links open in a new tab and code goes in ``<pre>``."""
    if text == "":
        return ""
    return _MD.render(text)