from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/learners/search", methods=["GET"], endpoint="api_learners_search")
    def api_learners_search():
        try:
            learners = container.learner_service.search(request.args.get("query", ""))
            return jsonify([l.to_summary() for l in learners]), 200
        except Exception:
            logger.exception("Error searching learners")
            return jsonify({"message": "Error searching learners"}), 500

    @app.route("/api/learners", methods=["GET"], endpoint="api_learners")
    def api_learners():
        try:
            learners = container.learner_service.list_all()
            return jsonify([l.to_dict() for l in learners]), 200
        except Exception:
            logger.exception("Error fetching learners")
            return jsonify({"message": "Error fetching learners."}), 500

    @app.route("/api/learners/count", methods=["GET"], endpoint="api_learners_count")
    def api_learners_count():
        try:
            return jsonify({"total_learners": container.learner_service.count()}), 200
        except Exception:
            logger.exception("Error fetching learner count")
            return jsonify({"message": "Error fetching learner count."}), 500

    @app.route("/api/learners/<int:learner_id>", methods=["DELETE"], endpoint="api_learner_delete")
    def api_learner_delete(learner_id: int):
        try:
            container.learner_service.delete(learner_id)
            return jsonify({"message": "Learner and associated attendance records removed successfully."}), 200
        except NotFoundError as e:
            return jsonify({"message": str(e)}), 404
        except Exception:
            logger.exception("Error removing learner %s", learner_id)
            return jsonify({"message": "Error removing learner and attendance records."}), 500
