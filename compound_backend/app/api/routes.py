"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest

from compound_backend.core.analysis import freedom_analysis
from compound_backend.core.formatting import (
    CURRENCIES,
    Currency,
    get_currency,
    page_title,
    share_payload,
)
from compound_backend.core.projection import ProjectionResult, project
from compound_backend.schemas.ping import PingResponse
from compound_backend.schemas.projection import (
    CurrencyListResponse,
    ProjectionRequest,
    ProjectionResponse,
    ShareRequest,
)

api_bp = Blueprint("api", __name__)
logger = logging.getLogger(__name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.warning("rejected %s payload: %d validation error(s)", request.path, exc.error_count())
    detail = exc.errors(include_url=False, include_context=False)
    return jsonify({"detail": detail}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(BadRequest)
def _handle_bad_request(exc: BadRequest):
    """Body was not JSON at all."""
    logger.warning("bad request on %s: %s", request.path, exc.description)
    return jsonify({"detail": exc.description}), HTTPStatus.BAD_REQUEST


def _currency_for(payload: ProjectionRequest) -> Currency:
    return get_currency(payload.currency or current_app.config["DEFAULT_CURRENCY"])


def _run_projection(payload: ProjectionRequest) -> ProjectionResult:
    inp = payload.to_projection_input()
    logger.info(
        "projection: %d years, %s mode, rate %s%%",
        inp.horizonYears,
        inp.contributionMode.value,
        inp.annualRatePercent,
    )
    return project(inp)


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong", service=current_app.config["SERVICE_NAME"])
    return jsonify(response.model_dump())


@api_bp.get("/currencies")
def currencies() -> Any:
    """Display currencies the calculator page can pick from."""
    response = CurrencyListResponse(
        default=current_app.config["DEFAULT_CURRENCY"],
        currencies=CURRENCIES,
    )
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/projection")
def projection() -> Any:
    """Year-by-year projection plus the freedom-point summary for the page."""
    raw_payload = request.get_json(force=True, silent=False)
    payload = ProjectionRequest.model_validate(raw_payload)

    result = _run_projection(payload)
    currency = _currency_for(payload)

    response = ProjectionResponse(
        records=list(result.records),
        freedomYear=result.freedomYear,
        finalInvested=result.finalInvested,
        finalEarned=result.finalEarned,
        finalTotalCapital=result.finalTotalCapital,
        analysis=freedom_analysis(result),
        currency=currency,
        title=page_title(result, payload.horizonYears, currency),
    )
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/share")
def share() -> Any:
    """Share-sheet text; copying it to the clipboard is left to the browser."""
    raw_payload = request.get_json(force=True, silent=False)
    payload = ShareRequest.model_validate(raw_payload)

    result = _run_projection(payload.projection)
    response = share_payload(
        result,
        payload.projection.horizonYears,
        _currency_for(payload.projection),
        payload.url or current_app.config["SHARE_URL"],
    )
    return jsonify(response.model_dump())
