from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Final

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .errors import ProviderError, ValidationError, add_exception_handlers
from .log import get_logger
from .phone import normalize_phone_number
from .sms import EmergencySmsRequest, TestSmsRequest, utc_timestamp
from .twilio_client import SmsSender

logger = get_logger(__name__)

HEALTH_STATUS: Final[str] = "LunaLock Emergency SMS Server Running"
TEST_MESSAGE: Final[str] = (
    "🧪 This is a test message from your LunaLock emergency system. "
    "If you received this, the SMS integration is working correctly!"
)


def log_startup(settings: Settings) -> None:
    logger.info("🚀 LunaLock Emergency SMS Server running on port %s", settings.port)
    logger.info("📱 Twilio Phone Number: %s", settings.twilio_phone_number or "NOT SET")
    logger.info("🔑 Account SID: %s", settings.masked_account_sid)
    logger.info("⚠️  Make sure environment variables are set!")


def create_app(sender: SmsSender | None = None, settings: Settings | None = None) -> FastAPI:
    """
    Build the relay application.

    `sender` is the one Twilio-backed dependency shared by all requests.
    When omitted it is created from the environment during startup.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: runs once before the app starts serving requests
        log_startup(settings)
        if app.state.sender is None:
            app.state.sender = SmsSender.from_settings(settings)
        yield
        # Shutdown: nothing to release, the Twilio client is stateless

    app = FastAPI(title="LunaLock SMS Relay", version="0.1.0", lifespan=lifespan)
    app.state.sender = sender

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    add_exception_handlers(app)

    # --- Routes ---

    @app.get("/")
    def health() -> dict[str, str]:
        return {"status": HEALTH_STATUS, "timestamp": utc_timestamp()}

    @app.post("/send-emergency-sms")
    def send_emergency_sms(payload: EmergencySmsRequest, request: Request) -> JSONResponse:
        """
        Forward an emergency message to one contact.

        Accepts JSON:

          { "to": "555-123-4567", "message": "...", "contactName": "Mom", "hasLocation": true }

        contactName and hasLocation are only logged.
        """
        if not payload.to or not payload.message:
            raise ValidationError("Missing required fields: to, message")

        to_number = normalize_phone_number(payload.to)

        logger.info("📱 Emergency SMS Request:")
        logger.info("   To: %s (%s)", to_number, payload.contact_name or "Unknown")
        logger.info("   Has Location: %s", payload.has_location or False)
        logger.info("   Message Length: %d chars", len(payload.message))
        logger.info("   Timestamp: %s", utc_timestamp())

        sender: SmsSender = request.app.state.sender
        try:
            sent = sender.send(to=to_number, body=payload.message)
        except ProviderError as exc:
            logger.error("❌ Error sending emergency SMS: %s", exc.message)
            return JSONResponse(
                status_code=exc.status_code,
                content={
                    "success": False,
                    "error": exc.message,
                    "code": exc.envelope_code,
                    "timestamp": utc_timestamp(),
                },
            )

        logger.info("✅ SMS sent successfully!")
        logger.info("   Message SID: %s", sent.sid)
        logger.info("   Status: %s", sent.status)

        return JSONResponse(
            {
                "success": True,
                "messageSid": sent.sid,
                "status": sent.status,
                "to": to_number,
                "timestamp": utc_timestamp(),
            }
        )

    @app.post("/test-sms")
    def test_sms(payload: TestSmsRequest, request: Request) -> JSONResponse:
        """
        Send a fixed diagnostic message to check the Twilio setup.

        The number goes to Twilio exactly as given (no normalization).
        """
        if not payload.to:
            raise ValidationError("Phone number required")

        sender: SmsSender = request.app.state.sender
        try:
            sent = sender.send(to=payload.to, body=TEST_MESSAGE)
        except ProviderError as exc:
            logger.error("❌ Test SMS failed: %s", exc.message)
            return JSONResponse(
                status_code=exc.status_code,
                content={"success": False, "error": exc.message},
            )

        logger.info("📋 Test SMS sent to %s: %s", payload.to, sent.sid)
        return JSONResponse(
            {
                "success": True,
                "messageSid": sent.sid,
                "message": "Test SMS sent successfully",
            }
        )

    return app


app = create_app()
