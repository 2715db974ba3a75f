from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        """Alive even when the database is not: ``db`` reports the round-trip."""
        return jsonify({"ok": True, "db": bool(container.conn.ping())})
