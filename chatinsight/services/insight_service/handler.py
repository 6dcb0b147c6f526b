"""Insight Service HTTP handler.

Thin HTTP surface for the hosting chat application. The engine itself
performs no storage or realtime delivery; callers persist the returned
insight (see ``MessageAnalysis.to_record``) and fan it out themselves.

Failures are reported as errors, never as a neutral insight: a broken
classifier must not look like a clean bill of health.
"""
import logging
import os

from flask import Flask, jsonify, request

from .analyzer import MentalHealthAnalyzer
from .config import AnalyzerConfig, ScoringConfig
from .conversation import ConversationAggregator
from .exceptions import ClassificationError, InvalidMessageError
from .recommendations import alert_title

logger = logging.getLogger(__name__)

# Initialize Flask app
app = Flask(__name__)

# Initialize analyzer with configuration
config = AnalyzerConfig(
    cache_capacity=int(os.getenv("INSIGHT_CACHE_CAPACITY", "100")),
    lexicon_version=os.getenv("LEXICON_VERSION", AnalyzerConfig.lexicon_version),
)
scoring = ScoringConfig(
    percentage_mode=os.getenv("INSIGHT_SCORE_SCALE", "percentage").lower() != "raw",
)
analyzer = MentalHealthAnalyzer(config=config, scoring=scoring)
aggregator = ConversationAggregator(analyzer)


@app.route("/health", methods=["GET"])
def health():
    """Health check endpoint.

    Returns:
        200 with service status
    """
    return jsonify({
        "status": "healthy",
        "service": "insight-service",
        "lexicon_version": config.lexicon_version,
    }), 200


@app.route("/ready", methods=["GET"])
def ready():
    """Readiness check - verifies analyzer is initialized.

    Returns:
        200 if ready, 503 if not
    """
    if analyzer is None:
        return jsonify({"status": "not_ready", "reason": "analyzer_not_initialized"}), 503
    return jsonify({"status": "ready", "analyzer": analyzer.get_status()}), 200


@app.route("/analyze", methods=["POST"])
def analyze_message():
    """Analyze one message.

    Request Body:
        {"message": "Message text"}

    Response:
        {
            "sentiment_score": 0-100,
            "emotional_state": "POSITIVE" | "NEUTRAL" | "NEGATIVE",
            "risk_level": "LOW" | "MEDIUM" | "HIGH",
            "keywords": [...],
            "recommendations": [...],
            "should_alert": true | false,
            "alert_title": "..."
        }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        logger.warning("ANALYZE_REQUEST_INVALID", extra={"reason": "body_not_object"})
        return jsonify({"error": "Request body must be a JSON object"}), 400

    message = data.get("message")
    if not isinstance(message, str):
        logger.warning("ANALYZE_REQUEST_INVALID", extra={"reason": "missing_message"})
        return jsonify({"error": "Missing required field: message"}), 400

    try:
        result = analyzer.analyze(message)
    except InvalidMessageError as e:
        return jsonify({"error": str(e)}), 400
    except ClassificationError as e:
        logger.error(
            "ANALYZE_FAILED",
            extra={"error": str(e), "error_type": type(e).__name__}
        )
        return jsonify({"error": "Message classification failed"}), 500

    body = result.to_dict()
    body["should_alert"] = analyzer.should_alert(result)
    body["alert_title"] = alert_title(result.risk_level)
    return jsonify(body), 200


@app.route("/analyze/conversation", methods=["POST"])
def analyze_conversation():
    """Analyze a conversation's history.

    Request Body:
        {"messages": ["oldest", null, "...", "newest"]}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        logger.warning("CONVERSATION_REQUEST_INVALID", extra={"reason": "body_not_object"})
        return jsonify({"error": "Request body must be a JSON object"}), 400

    messages = data.get("messages")
    if not isinstance(messages, list):
        logger.warning("CONVERSATION_REQUEST_INVALID", extra={"reason": "missing_messages"})
        return jsonify({"error": "Missing required field: messages"}), 400

    try:
        result = aggregator.aggregate(messages)
    except InvalidMessageError as e:
        return jsonify({"error": str(e)}), 400
    except ClassificationError as e:
        logger.error(
            "CONVERSATION_ANALYZE_FAILED",
            extra={"error": str(e), "error_type": type(e).__name__}
        )
        return jsonify({"error": "Conversation classification failed"}), 500

    body = result.to_dict()
    body["should_alert"] = analyzer.should_alert(result)
    body["alert_title"] = alert_title(result.risk_level)
    return jsonify(body), 200


if __name__ == "__main__":
    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    port = int(os.getenv("PORT", "8004"))
    app.run(host="0.0.0.0", port=port, debug=False)
