"""Application setup and the command that serves the post board."""

from __future__ import annotations

import argparse
import os

from dotenv import find_dotenv, load_dotenv
from flask import Flask

from .handlers import DATABASE_KEY, blueprint
from .repository import Database
from .schema import _database_path


def hello() -> str:
    return "Hello from Actix + SeaORM!"


def create_app(database_path) -> Flask:
    """Build the application around a store at ``database_path``, migrating it."""
    app = Flask(__name__)
    app.json.sort_keys = False
    app.extensions[DATABASE_KEY] = Database(database_path)
    app.register_blueprint(blueprint)
    return app


def main(argv=None) -> int:
    """Apply migrations and serve the application."""
    load_dotenv(find_dotenv(usecwd=True))
    parser = argparse.ArgumentParser(prog="postboard", description="Serve the post board.")
    parser.add_argument(
        "-u",
        "--database-url",
        default=os.environ.get("DATABASE_URL"),
        help="database URL (defaults to DATABASE_URL)",
    )
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    args = parser.parse_args(argv)
    if not args.database_url:
        parser.error("no database URL given and DATABASE_URL is not set")

    app = create_app(_database_path(args.database_url))
    app.run(host=args.host, port=args.port)
    return 0