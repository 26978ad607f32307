"""
AWS Lambda proxy-integration entry point.
Netlify Functions have no Python runtime, so serving it from Netlify needs a
small JS shim that forwards the event here.
Accepts a proxy-integration event ({httpMethod, body, isBase64Encoded}) and
returns {statusCode, headers, body}.
"""

import asyncio
import base64
import logging

from config import load_settings
from core.proxy_handler import InternalFailure, ProxyHandler, to_response

settings = load_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

_proxy = ProxyHandler(settings)


def _event_body(event):
    body = event.get('body')
    if body is not None and event.get('isBase64Encoded'):
        body = base64.b64decode(body).decode('utf-8')
    return body


def handler(event, context, proxy=None):
    """Main function handler."""
    proxy = proxy or _proxy
    method = event.get('httpMethod') or event.get('requestContext', {}).get('http', {}).get('method', '')

    try:
        body = _event_body(event)
    except ValueError as e:
        logger.error(f"Server-side error: could not decode event body: {e}")
        return to_response(InternalFailure(str(e) or type(e).__name__)).to_dict()

    loop = asyncio.new_event_loop()
    try:
        response = loop.run_until_complete(proxy.handle(method, body))
    finally:
        loop.close()

    return response.to_dict()


# AWS Lambda looks for lambda_handler by convention
lambda_handler = handler
