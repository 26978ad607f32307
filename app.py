"""
Flask application for the Gemini prompt proxy.
Keeps the Gemini API key on the server and relays prompts from the frontend.
"""

from flask import Flask, Response, jsonify, request
import asyncio
import logging
from datetime import datetime

from config import load_settings, detect_environment
from core.proxy_handler import ProxyHandler

# Load settings (.env locally, platform environment on Vercel)
settings = load_settings()

# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

ENVIRONMENT = detect_environment()

if not settings.api_key_configured:
    logger.warning("⚠️ GEMINI_API_KEY is not set - /api/analyze will answer 500 until it is configured")

ALL_METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']


def create_app(handler=None):
    """Build the Flask app around a proxy handler."""
    app = Flask(__name__)
    proxy = handler or ProxyHandler(settings)

    def run_handler(method, body):
        # Each request gets its own event loop; no state is shared across invocations
        loop = asyncio.new_event_loop()
        try:
            return loop.run_until_complete(proxy.handle(method, body))
        finally:
            loop.close()

    @app.route('/api/analyze', methods=ALL_METHODS, provide_automatic_options=False)
    def analyze():
        """Relay a prompt to Gemini (POST only)."""
        result = run_handler(request.method, request.get_data(as_text=True))
        return Response(result.body, status=result.status_code, mimetype=result.content_type)

    @app.route('/health')
    def health():
        """Health check; reports configuration without exposing the key."""
        return jsonify({
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "environment": ENVIRONMENT,
            "gemini": {
                "api_key_configured": proxy.settings.api_key_configured,
                "model": proxy.settings.model,
                "host": proxy.settings.api_host
            }
        })

    return app


app = create_app()


if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5000)
