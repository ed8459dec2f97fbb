# -*- coding: utf-8 -*-
"""
Flask application entrypoint and factory for the plant diagnosis proxy.
"""

from flask import Flask, request, jsonify
import os
from werkzeug.exceptions import MethodNotAllowed

from plant_diagnosis.services.diagnosis import (
    DiagnosisConfig,
    DiagnosisRequest,
    run_diagnosis,
)
from plant_diagnosis.services.errors import ClientInputError
from plant_diagnosis.services import gemini


def _optional_float(value):
    if value in (None, ""):
        return None
    return float(value)


def create_app(config=None):
    app = Flask(__name__)
    app.config['GEMINI_API_KEY'] = os.environ.get("GEMINI_API_KEY")
    app.config['GEMINI_MODEL'] = os.environ.get("GEMINI_MODEL", gemini.DEFAULT_MODEL)
    app.config['GEMINI_API_BASE'] = os.environ.get("GEMINI_API_BASE", gemini.DEFAULT_API_BASE)
    # Unset means no client-side timeout, matching the transport default.
    app.config['GEMINI_TIMEOUT_SECONDS'] = _optional_float(os.environ.get("GEMINI_TIMEOUT_SECONDS"))
    if config:
        app.config.update(config)

    @app.errorhandler(MethodNotAllowed)
    def handle_method_not_allowed(e):
        """Handle non-POST requests (input: error; output: JSON 405)."""
        allow = ", ".join(e.valid_methods or [])
        return jsonify({"error": "Method not allowed"}), 405, {"Allow": allow}

    def _require_api_key():
        """Validate the Gemini credential (input: app config; output: error response or None)."""
        # Fail before any upstream call when the function is not wired to a key.
        if app.config.get("GEMINI_API_KEY"):
            return None
        app.logger.error("GEMINI_API_KEY is not configured.")
        return jsonify({"error": "API key is not configured on the server."}), 500

    def _diagnosis_config():
        return DiagnosisConfig(
            model=app.config["GEMINI_MODEL"],
            api_base=app.config["GEMINI_API_BASE"],
            timeout=app.config.get("GEMINI_TIMEOUT_SECONDS"),
        )

    # OPTIONS is not auto-answered; every non-POST method gets the JSON 405.
    @app.route("/api/diagnose", methods=["POST"], provide_automatic_options=False)
    def diagnose():
        """Diagnose a plant image (input: JSON image/mimeType; output: HTML text)."""
        if (err := _require_api_key()) is not None:
            return err

        try:
            diagnosis_request = DiagnosisRequest.from_payload(request.get_json(silent=True))
        except ClientInputError as exc:
            return jsonify({"error": str(exc)}), 400

        try:
            analysis = run_diagnosis(diagnosis_request, app.config["GEMINI_API_KEY"], _diagnosis_config())
        except Exception as exc:
            app.logger.exception("Internal server error:")
            return jsonify({"error": str(exc)}), 500

        return analysis, 200

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=False)
