"""Triage API HTTP handler.

Thin HTTP layer over the three pure entry points. The engine itself
never logs; this layer records outcomes (hashed identifiers only) for
the audit collaborator and renders results as JSON.

Validation errors return 400 naming the offending field. Unexpected
failures return 500 and are logged.
"""
import logging
import os
from flask import Flask, request, jsonify

from safeharbor.shared.exceptions import SafeHarborValidationError
from safeharbor.shared.utils import configure_pii_salt, fingerprint_responses, hash_pii
from safeharbor.services.assessment_engine import (
    QUESTION_CATALOG,
    ScoringConfig,
    assess_crisis_severity,
)
from safeharbor.services.mood_service import MoodAnalysisConfig, analyze_mood_risk
from safeharbor.services.prevention_service import generate_prevention_plan

logger = logging.getLogger(__name__)

app = Flask(__name__)

pii_salt = os.getenv("PII_HASH_SALT", "default_dev_salt_change_in_production_32chars")
configure_pii_salt(pii_salt)

scoring_config = ScoringConfig(
    catalog_version=os.getenv("CATALOG_VERSION", ScoringConfig().catalog_version),
)
mood_config = MoodAnalysisConfig(window_days=int(os.getenv("MOOD_WINDOW_DAYS", "7")))

CRISIS_RESOURCES = [
    {"name": "988 Suicide & Crisis Lifeline", "contact": "988", "available_24_7": True},
    {"name": "Crisis Text Line", "contact": "Text HOME to 741741", "available_24_7": True},
    {"name": "SAMHSA National Helpline", "contact": "1-800-662-4357", "available_24_7": True},
    {"name": "NAMI HelpLine", "contact": "1-800-950-6264", "available_24_7": False},
    {"name": "Emergency Services", "contact": "911", "available_24_7": True},
]


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data


def _validation_error(event: str, error: SafeHarborValidationError):
    logger.warning(event, extra={"field": error.field, "reason": str(error)})
    return jsonify(error.to_dict()), 400


@app.route("/health", methods=["GET"])
def health():
    """Health check endpoint."""
    return jsonify({
        "status": "healthy",
        "service": "triage-api",
        "catalog_version": scoring_config.catalog_version,
    }), 200


@app.route("/ready", methods=["GET"])
def ready():
    """Readiness check - catalog loaded."""
    if not QUESTION_CATALOG:
        return jsonify({"status": "not_ready", "reason": "catalog_empty"}), 503
    return jsonify({"status": "ready"}), 200


@app.route("/questions", methods=["GET"])
def list_questions():
    """Ordered question catalog for form rendering."""
    return jsonify({
        "catalog_version": scoring_config.catalog_version,
        "questions": [q.to_dict() for q in QUESTION_CATALOG],
    }), 200


@app.route("/assessment", methods=["POST"])
def assess():
    """Assess crisis severity.

    Request Body:
        {
            "responses": {"self-harm-thoughts": 1, "hopelessness": 4, ...},
            "user_id": "user_123" (optional, hashed before logging)
        }

    Response:
        CrisisAssessmentResult as JSON
    """
    data = _json_body()
    if data is None:
        logger.warning("ASSESSMENT_REQUEST_INVALID", extra={"reason": "empty_body"})
        return jsonify({"error": "Request body required"}), 400
    if "responses" not in data:
        logger.warning("ASSESSMENT_REQUEST_INVALID", extra={"reason": "missing_responses"})
        return jsonify({"error": "Missing required field: responses", "field": "responses"}), 400

    user_id = data.get("user_id")
    user_id_hash = hash_pii(str(user_id)) if user_id else None

    try:
        result = assess_crisis_severity(data["responses"], config=scoring_config)
    except SafeHarborValidationError as e:
        return _validation_error("ASSESSMENT_REQUEST_INVALID", e)
    except Exception as e:
        logger.error("ASSESSMENT_ERROR", extra={"user_id_hash": user_id_hash, "error": str(e)})
        return jsonify({"error": "Failed to assess responses"}), 500

    log_extra = {
        "user_id_hash": user_id_hash,
        "responses_hash": fingerprint_responses(data["responses"]),
        "severity": result.severity.value,
        "score": round(result.score, 3),
        "critical_factor_count": result.critical_factor_count,
        "patterns": [p.pattern_id for p in result.patterns],
        "confidence": result.confidence,
        "catalog_version": result.catalog_version,
    }
    if result.requires_immediate:
        logger.critical("ASSESSMENT_IMMEDIATE_RISK", extra=log_extra)
    else:
        logger.info("ASSESSMENT_COMPLETED", extra=log_extra)

    return jsonify(result.to_dict()), 200


@app.route("/mood-risk", methods=["POST"])
def mood_risk():
    """Analyze mood history.

    Request Body:
        {
            "entries": [{"timestamp": "...", "mood_score": 4, ...}],
            "window_days": 7 (optional),
            "reference_time": "2026-10-17T00:00:00Z" (optional)
        }
    """
    data = _json_body()
    if data is None:
        return jsonify({"error": "Request body required"}), 400

    try:
        result = analyze_mood_risk(
            data.get("entries", []),
            window_days=data.get("window_days"),
            reference_time=data.get("reference_time"),
            config=mood_config,
        )
    except SafeHarborValidationError as e:
        return _validation_error("MOOD_RISK_REQUEST_INVALID", e)
    except Exception as e:
        logger.error("MOOD_RISK_ERROR", extra={"error": str(e)})
        return jsonify({"error": "Failed to analyze mood history"}), 500

    logger.info(
        "MOOD_RISK_COMPLETED",
        extra={
            "risk_level": result.risk_level.value,
            "signal_count": len(result.warning_signals),
            "entries_analyzed": result.entries_analyzed,
        }
    )
    return jsonify(result.to_dict()), 200


@app.route("/prevention-plan", methods=["POST"])
def prevention_plan():
    """Generate a prevention plan.

    Request Body:
        {
            "risk_factors": ["Social isolation detected"],
            "protective_factors": ["Social support available"],
            "prior_events": [{"severity": "high", "timestamp": "...",
                              "coping_strategies_used": ["..."]}]
        }
    """
    data = _json_body()
    if data is None:
        return jsonify({"error": "Request body required"}), 400

    try:
        plan = generate_prevention_plan(
            data.get("risk_factors", []),
            data.get("protective_factors", []),
            data.get("prior_events", []),
        )
    except SafeHarborValidationError as e:
        return _validation_error("PREVENTION_PLAN_REQUEST_INVALID", e)
    except Exception as e:
        logger.error("PREVENTION_PLAN_ERROR", extra={"error": str(e)})
        return jsonify({"error": "Failed to generate prevention plan"}), 500

    logger.info(
        "PREVENTION_PLAN_GENERATED",
        extra={
            "risk_factor_count": len(data.get("risk_factors") or []),
            "prior_event_count": len(data.get("prior_events") or []),
            "coping_strategy_count": len(plan.coping_strategies),
        }
    )
    return jsonify(plan.to_dict()), 200


@app.route("/resources", methods=["GET"])
def resources():
    """Static crisis resource list."""
    return jsonify({"resources": CRISIS_RESOURCES}), 200


if __name__ == "__main__":
    port = int(os.getenv("PORT", "8080"))
    logging.basicConfig(level=logging.INFO)
    app.run(host="0.0.0.0", port=port, debug=False)
