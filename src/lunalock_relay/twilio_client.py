from __future__ import annotations

from typing import Any

import requests
from twilio.base.exceptions import TwilioException, TwilioRestException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client

from .config import Settings, get_settings
from .errors import ProviderError
from .log import get_logger
from .sms import SentMessage

logger = get_logger(__name__)


def get_twilio_client(settings: Settings | None = None) -> Client:
    settings = settings or get_settings()

    if not settings.twilio_account_sid or not settings.twilio_auth_token:
        raise RuntimeError(
            "Twilio credentials are not configured (TWILIO_ACCOUNT_SID / TWILIO_AUTH_TOKEN)"
        )

    http_client = None
    if settings.provider_timeout is not None:
        http_client = TwilioHttpClient(timeout=settings.provider_timeout)

    return Client(settings.twilio_account_sid, settings.twilio_auth_token, http_client=http_client)


class SmsSender:
    """
    Sends one SMS from the configured Twilio number.

    Built once at startup and shared by every request; it holds no
    per-request state.
    """

    def __init__(self, client: Any, from_number: str | None) -> None:
        self.client = client
        self.from_number = from_number

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> SmsSender:
        settings = settings or get_settings()
        return cls(get_twilio_client(settings), settings.twilio_phone_number)

    def send(self, to: str, body: str) -> SentMessage:
        """
        Single attempt, no retry. Any Twilio or transport failure is
        raised as ProviderError with Twilio's code when there is one.
        """
        try:
            result = self.client.messages.create(
                body=body,
                from_=self.from_number,
                to=to,
            )
        except TwilioRestException as exc:
            logger.error("Twilio Error Code: %s", exc.code)
            logger.error("Twilio Error Message: %s", exc.msg)
            raise ProviderError(exc.msg, code=exc.code) from exc
        except (TwilioException, requests.RequestException) as exc:
            raise ProviderError(str(exc)) from exc

        return SentMessage(sid=result.sid, status=result.status)
