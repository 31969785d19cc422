"""WSGI entry point for the task manager API."""

import os

from taskmanager import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))

if __name__ == "__main__":
    app.run(port=app.config["BACKEND_PORT"])
