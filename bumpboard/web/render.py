"""
BumpBoard Page Rendering

Markdown to sanitized HTML, and the Jinja templates for the HTML pages.
"""

import bleach
from flask import render_template_string
from markdown_it import MarkdownIt
from markupsafe import Markup

from ..core.board_store import BoardStore
from ..core.models import ThreadSnapshot, ThreadSummary
from ..utils.formatting import format_timestamp

# Markdown renderer (commonmark + breaks)
_md = MarkdownIt("commonmark", {"breaks": True})

_ALLOWED_TAGS = [
    "p", "br", "strong", "em", "code", "pre", "blockquote", "hr",
    "ul", "ol", "li", "a", "h1", "h2", "h3", "h4", "h5", "h6",
]
_ALLOWED_ATTRS = {"a": ["href", "title", "rel"]}


def markdown_to_html(text: str) -> Markup:
    """Render Markdown and strip anything outside the allowed tag set."""
    html = _md.render(text or "")
    cleaned = bleach.clean(
        html,
        tags=_ALLOWED_TAGS,
        attributes=_ALLOWED_ATTRS,
        protocols=["http", "https", "mailto"],
        strip=True,
    )
    return Markup(cleaned)


_LAYOUT = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{ page_title }}</title>
</head>
<body>
{{ content }}
</body>
</html>
"""

_INDEX = """<h1>{{ forum_name }} <a href="/api/boards"><button>JSON API</button></a></h1>
<hr>
<h2>Boards</h2>
{% for board in boards %}
<a href="/{{ board.name }}/">{{ board.name }} - {{ board.description }}</a><br>
{% endfor %}
"""

_BOARD = """<a href="/"><button>Back to homepage</button></a>
<h1>{{ forum_name }} : {{ board.name }}
<a href="/api/{{ board.name }}/thread/recent"><button>JSON API</button></a></h1>
<h3>{{ board.description }}</h3>
<form method="post" action="/api/thread/create">
<input type="hidden" name="board" value="{{ board.name }}">
<input type="text" name="title" placeholder="Title" maxlength="{{ max_title_length }}" required><br>
<textarea name="text" placeholder="Text (Markdown)" required></textarea><br>
<button type="submit">Create thread</button>
</form>
{% for thread in threads %}
<hr>
<p>{{ thread.created_at | timestamp }} | {{ thread.modified_at | timestamp }} | {{ thread.poster_hash }} | {{ thread.reply_count }} replies<br>
<a href="/{{ board.name }}/thread/{{ thread.id }}">{{ thread.title }}</a></p>
{% endfor %}
"""

_THREAD = """<a href="/{{ board.name }}/"><button>Back to board</button></a>
<h1>{{ thread.title }}
<a href="/api/{{ board.name }}/thread/{{ thread.id }}"><button>JSON API</button></a></h1>
<h6>{{ thread.created_at | timestamp }} | {{ thread.modified_at | timestamp }} | {{ thread.poster_hash }}</h6>
<article>{{ thread.text | markdown }}</article>
{% for reply in thread.replies %}
<hr>
<article><h6>{{ reply.poster_hash }}</h6>{{ reply.text | markdown }}</article>
{% endfor %}
{% if can_reply %}
<form method="post" action="/api/thread/post">
<input type="hidden" name="board" value="{{ board.name }}">
<input type="hidden" name="id" value="{{ thread.id }}">
<textarea name="text" placeholder="Reply (Markdown)" required></textarea><br>
<button type="submit">Reply</button>
</form>
{% endif %}
"""

_MESSAGE = """<a href="{{ back_href }}"><button>Back</button></a>
<h1>{{ heading }}</h1>
<p>{{ message }}</p>
"""


def _page(page_title: str, template: str, **context) -> str:
    content = render_template_string(template, **context)
    return render_template_string(_LAYOUT, page_title=page_title, content=Markup(content))


def render_index(forum_name: str, boards: list[dict]) -> str:
    return _page(forum_name, _INDEX, forum_name=forum_name, boards=boards)


def render_board(
    forum_name: str,
    store: BoardStore,
    threads: list[ThreadSummary],
    max_title_length: int
) -> str:
    return _page(
        f"{forum_name} : {store.name}",
        _BOARD,
        forum_name=forum_name,
        board=store,
        threads=threads,
        max_title_length=max_title_length,
    )


def render_thread(forum_name: str, store: BoardStore, thread: ThreadSnapshot, can_reply: bool) -> str:
    """Render a full thread page. The result is what the render cache stores."""
    return _page(
        f"{forum_name} - {thread.title}",
        _THREAD,
        board=store,
        thread=thread,
        can_reply=can_reply,
    )


def render_message(forum_name: str, heading: str, message: str, back_href: str = "/") -> str:
    return _page(
        f"{forum_name} - {heading}",
        _MESSAGE,
        heading=heading,
        message=message,
        back_href=back_href,
    )


def register_filters(app):
    """Install the template filters used by the pages above."""
    app.jinja_env.filters["markdown"] = markdown_to_html
    app.jinja_env.filters["timestamp"] = format_timestamp
