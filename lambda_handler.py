# lambda_handler.py
# AWS Lambda handlers for the quiz submission relay

from mangum import Mangum
import logging
import os
import json

from relay.api import app, CORS_HEADERS, SERVICE_NAME, SERVICE_VERSION
from relay.config import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

# Wrap FastAPI app with Mangum for Lambda compatibility
submission_handler = Mangum(app, lifespan="off")

# Lambda handlers
def submission(event, context):
    """
    Lambda handler for the relay API
    Handles POST/OPTIONS on /api/telegram
    """
    try:
        return submission_handler(event, context)
    except Exception:
        logger.exception("Unhandled error in submission handler")
        return {
            "statusCode": 500,
            "body": json.dumps({
                "error": "Failed to send message to Telegram"
            }),
            "headers": {
                "Content-Type": "application/json",
                **CORS_HEADERS
            }
        }

# Health check handler
def health_check(event, context):
    """
    Simple health check endpoint
    """
    return {
        "statusCode": 200,
        "body": json.dumps({
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "environment": os.getenv("AWS_LAMBDA_FUNCTION_NAME", "local")
        }),
        "headers": {
            "Content-Type": "application/json",
            **CORS_HEADERS
        }
    }
