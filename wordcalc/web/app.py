"""HTTP surface over the expression service."""

from __future__ import annotations

from flask import Flask, jsonify, request

from wordcalc.interp.errors import InterpError
from wordcalc.service.expression import ExpressionService, ExpressionServiceError
from wordcalc.service.models import Method
from wordcalc.utils.logging import get_logger, set_request_context

logger = get_logger("web.app")

ERRORS_ENDPOINT = "/errors"


class BadRequest(Exception):
    """Request body is not a JSON object with a string 'expression'."""

    pass


def _read_expression() -> str:
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not isinstance(data.get("expression"), str):
        raise BadRequest("request body must be a JSON object with an 'expression' string")
    return data["expression"]


def _error(status: int, message: str):
    return jsonify({"message": message}), status


def create_app(service: ExpressionService) -> Flask:
    """
    Build the Flask application.

    Args:
        service: Expression service backing every endpoint

    Returns:
        Configured Flask app
    """
    app = Flask("wordcalc")

    @app.before_request
    def bind_request_context():
        set_request_context(request.path, request.headers.get("X-Correlation-ID", ""))

    @app.errorhandler(BadRequest)
    def handle_bad_request(e: BadRequest):
        return _error(400, str(e))

    @app.errorhandler(ExpressionServiceError)
    def handle_service_error(e: ExpressionServiceError):
        logger.error("service_error", error=str(e))
        return _error(500, str(e))

    @app.post(Method.EVALUATE.endpoint)
    def evaluate():
        expression = _read_expression()
        try:
            result = service.evaluate(expression)
        except InterpError as e:
            return _error(400, e.message)
        return jsonify({"result": result})

    @app.post(Method.VALIDATE.endpoint)
    def validate():
        expression = _read_expression()
        try:
            valid = service.validate(expression)
        except InterpError as e:
            return jsonify({"valid": False, "reason": e.message})
        return jsonify({"valid": valid})

    @app.route(ERRORS_ENDPOINT, methods=["GET", "POST"])
    def expression_errors():
        errors = service.get_expression_errors()
        return jsonify([e.to_dict() for e in errors])

    return app
