#!/usr/bin/env python3
"""
Flask REST API for the LND channel agent.

Routes:
    GET  /health  - node connection check
    GET  /tools   - tool metadata (name, description, input/output schemas)
    POST /query   - {"query": "..."} -> {"type", "response", "data"}
"""
import logging
import sys

from flask import Flask, jsonify, request

from .app import LndChannelAgentApp
from .config_loader import load_config_from_env
from .exceptions import LndAgentError
from .security import sanitize_error
from .utils.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def create_app(agent_app: LndChannelAgentApp) -> Flask:
    """
    Build the Flask app around an initialized agent.

    :param agent_app: LndChannelAgentApp (initialize() is called if needed)
    """
    agent_app.initialize()

    app = Flask(__name__)

    @app.route("/health", methods=["GET"])
    def health():
        """Node connection check."""
        try:
            agent_app.check_connection()
        except LndAgentError as e:
            return jsonify({"status": "unavailable", "error": sanitize_error(e)}), 503
        return jsonify({"status": "ok"})

    @app.route("/tools", methods=["GET"])
    def tools():
        """Tool metadata."""
        return jsonify({"tools": agent_app.get_tools()})

    @app.route("/query", methods=["POST"])
    def query():
        """Query endpoint."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or "query" not in data:
            return jsonify({"error": "Missing 'query' in request body"}), 400
        if not isinstance(data["query"], str):
            return jsonify({"error": "'query' must be a string"}), 400

        return jsonify(agent_app.query(data["query"]))

    return app


def main() -> None:
    """Load configuration from the environment and serve the API."""
    try:
        config = load_config_from_env()
    except LndAgentError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(config.log_level)

    try:
        agent_app = LndChannelAgentApp(config)
        app = create_app(agent_app)
    except LndAgentError as e:
        logger.error(f"Failed to initialize agent: {sanitize_error(e)}")
        sys.exit(1)

    logger.info(f"Serving channel agent on {config.server_host}:{config.server_port}")
    app.run(host=config.server_host, port=config.server_port)


if __name__ == "__main__":
    main()
