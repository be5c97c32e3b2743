"""
project: Roomwalk
module: server.py
License: MIT

Server bootstrap: logging setup and the development HTTP server.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from roomwalk import create_app


def start_server(host="127.0.0.1", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Start the Flask development server with logging configured."""
    app = create_app()
    _configure_logging(app)
    app.run(host=host, port=port, debug=debug)


def _configure_logging(app):
    """Configure logging to both console and a rotating file in instance/.

    The file path will be instance/app.log. Retains a few backups to avoid growth.
    """
    log_dir = app.instance_path
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, "app.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))

    # Avoid duplicate handlers if reconfigured
    for h in list(root.handlers):
        root.removeHandler(h)

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path
