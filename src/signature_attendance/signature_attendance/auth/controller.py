from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    def api_login():
        data = request.get_json(silent=True) or {}
        try:
            token = container.auth_service.login(data.get("username"), data.get("password"))
        except AuthenticationError as e:
            logger.info("Rejected login for %r", data.get("username"))
            return jsonify({"message": str(e)}), 401
        return jsonify({"message": "Login successful!", "token": token}), 200
