"""telegram plugin: SendMessage through the Telegram Bot API."""

from __future__ import annotations

from typing import Any

import httpx

from orka_plugins.config.schema import TelegramConfig
from orka_plugins.plugins.args import require_str
from orka_plugins.utils.exceptions import OrkaPluginError

REQUIRED_MESSAGE = "token, chatID and text are required"


class TelegramPlugin:
    def __init__(self, config: TelegramConfig | None = None, transport: httpx.BaseTransport | None = None):
        self.config = config or TelegramConfig()
        self._transport = transport

    def register(self, api: Any) -> None:
        api.register_method("SendMessage", self.send_message)

    def send_message(self, args: dict[str, Any]) -> dict[str, Any]:
        token, chat_id, text = (require_str(args, name, REQUIRED_MESSAGE) for name in ("token", "chatID", "text"))
        url = f"{self.config.api_base.rstrip('/')}/bot{token}/sendMessage"
        try:
            with httpx.Client(timeout=self.config.timeout_seconds, transport=self._transport) as client:
                resp = client.post(url, data={"chat_id": chat_id, "text": text})
        except httpx.HTTPError as exc:
            # The URL embeds the bot token; keep it out of the message.
            raise OrkaPluginError(
                f"failed to send request: {exc.__class__.__name__}",
                code="TELEGRAM_REQUEST_FAILED",
            ) from exc
        if resp.status_code != httpx.codes.OK:
            raise OrkaPluginError(
                f"telegram API returned status: {resp.status_code} {resp.reason_phrase}".rstrip(),
                code="TELEGRAM_API_ERROR",
                details={"status_code": resp.status_code},
            )
        try:
            body = resp.json()
        except ValueError:
            body = {}
        result = body.get("result") if isinstance(body, dict) else None
        message_id = result.get("message_id") if isinstance(result, dict) else None
        return {"messageID": "" if message_id is None else str(message_id)}
