"""
BumpBoard Web Application

Flask routes for the HTML pages and the JSON API.
"""

import logging
from functools import partial, wraps
from typing import Optional

from flask import Flask, Response, jsonify, redirect, request
from werkzeug.exceptions import HTTPException, NotFound, RequestEntityTooLarge

from ..config import Config
from ..core.errors import BoardError, INTERNAL, not_found, validation
from ..core.forum import Forum
from ..core.models import ReplyRecord, ThreadSnapshot, ThreadSummary
from ..utils.formatting import format_iso
from . import render
from .schemas import CreateThreadInput, ReplyInput, parse_id

logger = logging.getLogger(__name__)


def thread_to_json(thread: ThreadSnapshot) -> dict:
    """Wire format of a full thread."""
    return {
        "id": thread.id,
        "title": thread.title,
        "text": thread.text,
        "hash": thread.poster_hash,
        "created": format_iso(thread.created_at),
        "modified": format_iso(thread.modified_at),
        "replies": [reply_to_json(reply) for reply in thread.replies],
    }


def reply_to_json(reply: ReplyRecord) -> dict:
    data = {}
    if reply.created_at:
        data["created"] = format_iso(reply.created_at)
    data["hash"] = reply.poster_hash
    data["text"] = reply.text
    return data


def summary_to_json(summary: ThreadSummary) -> dict:
    return {
        "id": summary.id,
        "title": summary.title,
        "created": format_iso(summary.created_at),
        "modified": format_iso(summary.modified_at),
        "hash": summary.poster_hash,
        "replies": summary.reply_count,
    }


def create_app(forum: Forum, config: Optional[Config] = None) -> Flask:
    """
    Build the Flask application around a forum.

    Args:
        forum: Forum holding the boards
        config: Configuration (defaults to the forum's)
    """
    config = config or forum.config
    web = config.web
    forum_name = config.forum.name

    app = Flask(__name__)
    app.config.update(
        # Byte cap for the largest valid post: title and text limits count
        # characters, and JSON may escape each one to six bytes (\uXXXX)
        MAX_CONTENT_LENGTH=(web.max_title_length + web.max_text_length) * 6 + 4096,
    )
    app.forum = forum  # type: ignore[attr-defined]
    render.register_filters(app)

    def origin() -> str:
        return request.headers.get(config.identity.origin_header) or request.remote_addr or ""

    def ok(**payload) -> Response:
        return jsonify(ok=True, **payload)

    def fail(error: BoardError) -> tuple[Response, int]:
        return jsonify(ok=False, error=error.message), 400

    def preflight(methods: str, with_headers: bool = False) -> Response:
        resp = Response(status=204)
        resp.headers["Access-Control-Allow-Methods"] = methods
        if with_headers:
            resp.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return resp

    def json_api(fn):
        """Wrap a JSON endpoint: unexpected errors become an INTERNAL envelope."""
        @wraps(fn)
        def _wrap(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except HTTPException:
                raise
            except Exception:
                logger.exception(f"Unhandled error in {request.path}")
                return fail(INTERNAL)
        return _wrap

    def html_error(error: BoardError, back_href: str = "/") -> tuple[str, int]:
        return render.render_message(forum_name, "Error", error.message, back_href), 400

    @app.after_request
    def add_cors_headers(resp: Response) -> Response:
        if request.path.startswith("/api/"):
            resp.headers["Access-Control-Allow-Origin"] = web.cors_origin
        return resp

    @app.errorhandler(RequestEntityTooLarge)
    def body_too_large(e):
        error = validation("Text too long")
        if request.endpoint in ("form_create_thread", "form_reply"):
            return error.message, 400
        if request.path.startswith("/api/"):
            return fail(error)
        return html_error(error)

    @app.errorhandler(NotFound)
    def api_not_found(e):
        if request.path.startswith("/api/"):
            return fail(not_found("Not found"))
        return e

    # HTML pages

    @app.route("/")
    def index():
        return render.render_index(forum_name, forum.describe_boards())

    @app.route("/<board>/")
    def board_page(board: str):
        store, error = forum.get_board(board)
        if error:
            return html_error(error)
        threads, _ = forum.recent_threads(board)
        return render.render_board(
            forum_name,
            store,
            threads,
            web.max_title_length,
        )

    @app.route("/<board>/thread/<int:thread_id>")
    def thread_page(board: str, thread_id: int):
        page, error = forum.render_thread(
            board,
            thread_id,
            partial(render.render_thread, forum_name),
        )
        if error:
            return html_error(error, f"/{board}/")
        return page

    @app.route("/thread/<int:thread_id>")
    def legacy_thread_page(thread_id: int):
        return redirect(f"/{forum.default_board}/thread/{thread_id}", code=302)

    @app.route("/healthz")
    def healthz():
        return {"ok": True}, 200

    # HTML form posts

    @app.route("/api/thread/create", methods=["POST"])
    def form_create_thread():
        board = request.form.get("board") or forum.default_board
        data, error = CreateThreadInput.parse(
            request.form,
            max_title_length=web.max_title_length,
            max_text_length=web.max_text_length,
        )
        if error:
            return error.message, 400

        thread_id, error = forum.create_thread(board, data.title, data.text, origin())
        if error:
            return error.message, 400
        return redirect(f"/{board}/thread/{thread_id}", code=302)

    @app.route("/api/thread/post", methods=["POST"])
    def form_reply():
        board = request.form.get("board") or forum.default_board
        data, error = ReplyInput.parse(
            request.form,
            max_text_length=web.max_text_length,
            allow_string_id=True,
        )
        if error:
            return error.message, 400

        _, error = forum.reply(board, data.id, data.text, origin())
        if error:
            return error.message, 400
        return redirect(f"/{board}/thread/{data.id}", code=302)

    # JSON API

    @app.route("/api/boards", methods=["GET", "OPTIONS"])
    @json_api
    def api_boards():
        if request.method == "OPTIONS":
            return preflight("GET, OPTIONS")
        return ok(boards=forum.describe_boards())

    def recent(board: str):
        threads, error = forum.recent_threads(board)
        if error:
            return fail(error)
        store, _ = forum.get_board(board)
        return ok(
            board={
                "name": store.name,
                "description": store.description,
                "expiry": store.expiry_seconds,
            },
            threads=[summary_to_json(t) for t in threads],
        )

    def get_thread(board: str, raw_id: str):
        # Ids arrive as path text; anything but a non-negative integer is refused
        thread_id = parse_id(raw_id)
        if thread_id is None:
            return fail(validation("Bad id"))
        thread, error = forum.get_thread(board, thread_id)
        if error:
            return fail(error)
        return ok(thread=thread_to_json(thread))

    def create_thread(board: str):
        data, error = CreateThreadInput.parse(
            request.get_json(silent=True),
            max_title_length=web.max_title_length,
            max_text_length=web.max_text_length,
        )
        if error:
            return fail(error)

        thread_id, error = forum.create_thread(board, data.title, data.text, origin())
        if error:
            return fail(error)
        return ok(id=thread_id)

    def reply(board: str):
        data, error = ReplyInput.parse(
            request.get_json(silent=True),
            max_text_length=web.max_text_length,
        )
        if error:
            return fail(error)

        _, error = forum.reply(board, data.id, data.text, origin())
        if error:
            return fail(error)
        return ok()

    @app.route("/api/<board>/thread/recent", methods=["GET", "OPTIONS"])
    @json_api
    def api_recent(board: str):
        if request.method == "OPTIONS":
            return preflight("GET, OPTIONS")
        return recent(board)

    @app.route("/api/<board>/thread/<thread_id>", methods=["GET", "OPTIONS"])
    @json_api
    def api_thread(board: str, thread_id: str):
        if request.method == "OPTIONS":
            return preflight("GET, OPTIONS")
        return get_thread(board, thread_id)

    @app.route("/api/<board>/thread/create.json", methods=["POST", "OPTIONS"])
    @json_api
    def api_create_thread(board: str):
        if request.method == "OPTIONS":
            return preflight("POST, OPTIONS", with_headers=True)
        return create_thread(board)

    @app.route("/api/<board>/thread/post.json", methods=["POST", "OPTIONS"])
    @json_api
    def api_reply(board: str):
        if request.method == "OPTIONS":
            return preflight("POST, OPTIONS", with_headers=True)
        return reply(board)

    # Un-prefixed API routes act on the default board

    @app.route("/api/thread/recent", methods=["GET", "OPTIONS"])
    @json_api
    def legacy_recent():
        if request.method == "OPTIONS":
            return preflight("GET, OPTIONS")
        return recent(forum.default_board)

    @app.route("/api/thread/<thread_id>", methods=["GET", "OPTIONS"])
    @json_api
    def legacy_thread(thread_id: str):
        if request.method == "OPTIONS":
            return preflight("GET, OPTIONS")
        return get_thread(forum.default_board, thread_id)

    @app.route("/api/thread/create.json", methods=["POST", "OPTIONS"])
    @json_api
    def legacy_create_thread():
        if request.method == "OPTIONS":
            return preflight("POST, OPTIONS", with_headers=True)
        return create_thread(forum.default_board)

    @app.route("/api/thread/post.json", methods=["POST", "OPTIONS"])
    @json_api
    def legacy_reply():
        if request.method == "OPTIONS":
            return preflight("POST, OPTIONS", with_headers=True)
        return reply(forum.default_board)

    return app
