import logging
import os

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from relay.config import RelaySettings
from relay.formatter import build_report, build_summary
from relay.models import ErrorResponse, RelayResponse, SubmissionRecord
from relay.notifier import Notifier, TelegramNotifier

logger = logging.getLogger(__name__)

SERVICE_NAME = "Quiz Submission Relay"
SERVICE_VERSION = "1.0.0"
SUBMISSION_PATH = "/api/telegram"

# ==================== CONFIGURATION ====================

app = FastAPI(
    title=f"{SERVICE_NAME} API",
    description="Forwards quiz submissions to a Telegram chat as formatted reports",
    version=SERVICE_VERSION
)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    """Attach the permissive CORS headers to every response"""
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response

def error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=error).model_dump())

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return error_response(405, "Method not allowed")
    return error_response(exc.status_code, str(exc.detail))

# ==================== DEPENDENCIES ====================

def get_settings() -> RelaySettings:
    return RelaySettings.from_env()

def get_notifier(settings: RelaySettings = Depends(get_settings)) -> Notifier:
    return TelegramNotifier(settings)

# ==================== API ENDPOINTS ====================

@app.get("/")
def root():
    """API health check"""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION
    }

@app.options(SUBMISSION_PATH)
def preflight():
    return Response(status_code=200)

@app.post(SUBMISSION_PATH, response_model=RelayResponse)
async def relay_submission(
    request: Request,
    settings: RelaySettings = Depends(get_settings),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Relay a quiz submission to Telegram

    - Rejects bodies without name, email, score or total
    - Sends the detailed report, then a one-line summary
    - Any formatting or delivery failure becomes a generic 500
    """

    try:
        submission = SubmissionRecord.model_validate(await request.json())
    except ValueError as err:
        # Covers malformed JSON as well as pydantic's ValidationError
        logger.warning("Rejected unreadable submission body: %s", err.__class__.__name__)
        return error_response(400, "Invalid request body")

    if submission.missing_required_fields():
        logger.warning("Rejected submission with missing required fields")
        return error_response(400, "Missing required fields")

    try:
        report = build_report(submission)
        summary = build_summary(submission)

        # The summary is only attempted once the report has been delivered
        await notifier.send_message(settings.telegram_chat_id, report, parse_mode="HTML")
        await notifier.send_message(settings.telegram_chat_id, summary, parse_mode="HTML")
    except Exception:
        logger.exception("Telegram API error while relaying submission for %s", submission.name)
        return error_response(500, "Failed to send message to Telegram")

    logger.info(
        "Relayed submission for %s: %s/%s",
        submission.name, submission.score, submission.total
    )
    return RelayResponse()

# ==================== RUN SERVER ====================

if __name__ == "__main__":
    import uvicorn
    from relay.config import configure_logging

    configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
