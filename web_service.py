"""Flask web service serving the choose-your-path levels over HTTP."""

# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import logging
import os

from flask import Flask, Response, abort, request
from dotenv import load_dotenv

from cyp.config import GameConfig, LevelTable, load_game_config, load_level_table, normalize_route
from cyp.engine import handle_request


logger = logging.getLogger(__name__)


load_dotenv()


def _levels_path(levels_path: str | None) -> str | None:
    return levels_path or os.environ.get("CYP_LEVELS_PATH") or None


def _incoming_token(config: GameConfig) -> str | None:
    """Return the state token the client echoed back, if any."""

    if config.cookie_name:
        return request.cookies.get(config.cookie_name)
    return request.headers.get("Cookie")


def create_app(
    levels_path: str | None = None,
    *,
    game_config: GameConfig | None = None,
    level_table: LevelTable | None = None,
) -> Flask:
    """Return a configured Flask application ready to serve the game."""

    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
    app = Flask(__name__)
    config_path = _levels_path(levels_path)
    config_in_use = game_config or load_game_config(config_path)
    levels = level_table if level_table is not None else load_level_table(config_path)
    if config_in_use.entry_route not in levels:
        logger.warning("Entry route %s has no level configured", config_in_use.entry_route)

    @app.before_request
    def log_request() -> None:
        logger.info("%s %s", request.method, request.path)

    @app.route("/", defaults={"subpath": ""}, methods=["GET"])
    @app.route("/<path:subpath>", methods=["GET"])
    def play_level(subpath: str) -> Response:
        resolved = levels.resolve(request.path)
        if resolved is None:
            abort(404)
        route, descriptor = resolved
        result = handle_request(
            _incoming_token(config_in_use),
            descriptor,
            is_entry_route=normalize_route(request.path) == config_in_use.entry_route,
            entry_route=config_in_use.entry_route,
            page_title=config_in_use.page_title,
        )
        logger.debug(
            "Level %s served %s with state %s", route, result.visibility.value, result.set_cookie
        )
        response = Response(
            result.body,
            status=result.status,
            content_type=f"{result.content_type}; charset=utf-8",
        )
        if config_in_use.cookie_name:
            response.set_cookie(config_in_use.cookie_name, result.set_cookie, path="/")
        else:
            response.headers["Set-Cookie"] = result.set_cookie
        return response

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", 7860)))
