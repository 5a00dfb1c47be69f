"""
project: Undercroft
module: server.py
License: MIT

Server bootstrap utilities.

Exposes a helper to start the Flask development server with logging
configured to both console and a rotating file under the instance folder.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from undercroft import create_app


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Create the app, configure logging and serve requests until interrupted."""
    app = create_app()
    _configure_logging(app)
    logging.getLogger(__name__).info("Starting server on %s:%s (debug=%s)", host, port, debug)
    app.run(host=host, port=port, debug=debug)


def _configure_logging(app):
    """Configure logging to both console and a rotating file in instance/.

    The file path will be instance/app.log. Retains a few backups to avoid growth.
    Safe to call repeatedly: existing root handlers are replaced, not stacked.
    """
    log_dir = app.instance_path
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        pass
    log_path = os.path.join(log_dir, "app.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(formatter)

    for h in list(root.handlers):
        root.removeHandler(h)
        if isinstance(h, RotatingFileHandler):
            h.close()

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path
