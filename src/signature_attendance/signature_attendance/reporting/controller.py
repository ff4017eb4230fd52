from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance")
    def api_attendance():
        """Dashboard view: one entry per learner and module."""
        try:
            return jsonify(container.report_service.all_attendance()), 200
        except Exception:
            logger.exception("Error fetching attendance records for admin dashboard")
            return jsonify({"message": "Error fetching attendance records."}), 500

    @app.route("/api/learners/<int:learner_id>/attendance", methods=["GET"], endpoint="api_learner_attendance")
    def api_learner_attendance(learner_id: int):
        """History view for one learner: one entry per module day and title."""
        try:
            return jsonify(container.report_service.attendance_for_learner(learner_id)), 200
        except Exception:
            logger.exception("Error fetching attendance records for learner %s", learner_id)
            return jsonify({"message": "Error fetching attendance records."}), 500
