from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.validators import is_blank, require_int
from ..container import Container
from ..core.exceptions import NotFoundError, StoreError, ValidationError
from .service import SignRequest

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/learner-module", methods=["GET"], endpoint="api_learner_module_status")
    def api_learner_module_status():
        learner_id_s = request.args.get("learnerId")
        module_title = request.args.get("moduleTitle")
        if is_blank(learner_id_s) or is_blank(module_title):
            return jsonify({"message": "Missing parameters: learnerId, moduleTitle"}), 400

        try:
            learner_id = require_int(learner_id_s, "learnerId")
            record = container.signing_service.get_status(learner_id, module_title)
            return jsonify(record.to_dict() if record else {}), 200
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except Exception:
            logger.exception("Error fetching learner module attendance")
            return jsonify({"message": "Error fetching attendance status."}), 500

    @app.route("/api/sign-session", methods=["POST"], endpoint="api_sign_session")
    def api_sign_session():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}

        try:
            sign_request = SignRequest.from_payload(data)
            result = container.signing_service.sign_session(sign_request)
            return jsonify({"message": result.message, "learnerId": result.learner_id}), 201
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except NotFoundError as e:
            # Already rolled back; nothing was created.
            logger.warning("Sign-session rejected: %s", e)
            return jsonify({"message": f"Failed to sign session due to a server error: {e}"}), 500
        except StoreError:
            logger.exception("Error signing session")
            return jsonify({"message": "Failed to sign session due to a server error."}), 500
        except Exception:
            logger.exception("Unexpected error signing session")
            return jsonify({"message": "Failed to sign session due to a server error."}), 500
