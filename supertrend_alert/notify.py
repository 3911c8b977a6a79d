# supertrend_alert/notify.py
"""Outbound alert delivery. Senders never raise and never retry; failures are logged."""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import requests

from supertrend_alert.config import (
    HTTP_TIMEOUT_SEC,
    NOTIFIER,
    TELEGRAM_BOT_TOKEN,
    TELEGRAM_CHAT_ID,
    TG_CHUNK,
    WHATSAPP_API_URL,
    WHATSAPP_NUMBER,
)

logger = logging.getLogger(__name__)


class Notifier(ABC):
    @abstractmethod
    def send(self, message: str) -> bool:
        raise NotImplementedError


class LogNotifier(Notifier):
    """Used when no delivery channel is configured."""

    def send(self, message: str) -> bool:
        logger.info(f"[NOTIFY] (log only)\n{message}")
        return True


class WhatsAppNotifier(Notifier):
    """HTTP gateway that relays `message` to `number` on a GET request."""

    def __init__(self, api_url: str, number: str, timeout: float = HTTP_TIMEOUT_SEC):
        self.api_url = api_url
        self.number = number
        self.timeout = timeout

    def send(self, message: str) -> bool:
        try:
            r = requests.get(
                self.api_url,
                params={"message": message, "number": self.number},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"[NOTIFY] error sending alert: {e}")
            return False

        if r.status_code == 200:
            logger.info(f"[NOTIFY] alert sent:\n{message}")
            return True
        logger.error(f"[NOTIFY] failed to send alert: {r.status_code}")
        return False


def split_message(text: str, max_len: int = TG_CHUNK) -> List[str]:
    """
    Split on line boundaries into chunks of at most `max_len` chars.
    A line longer than `max_len` is hard-split.
    """
    text = (text or "").replace("\r\n", "\n").replace("\r", "\n")
    if len(text) <= max_len:
        return [text] if text else []

    chunks: List[str] = []
    cur = ""
    for line in text.split("\n"):
        if len(line) > max_len:
            if cur:
                chunks.append(cur.rstrip())
                cur = ""
            for start in range(0, len(line), max_len):
                chunks.append(line[start:start + max_len])
            continue

        candidate = (cur + "\n" + line) if cur else line
        if len(candidate) > max_len:
            chunks.append(cur.rstrip())
            cur = line
        else:
            cur = candidate

    if cur:
        chunks.append(cur.rstrip())
    return chunks


class TelegramNotifier(Notifier):
    def __init__(self, token: str, chat_id: str, chunk: int = TG_CHUNK, timeout: float = HTTP_TIMEOUT_SEC):
        self.url = f"https://api.telegram.org/bot{token}/sendMessage"
        self.chat_id = chat_id
        self.chunk = chunk
        self.timeout = timeout

    def send(self, message: str) -> bool:
        parts = split_message(message, self.chunk)
        if not parts:
            logger.warning("[TG] empty message, nothing sent")
            return False
        total = len(parts)
        ok = True
        for i, part in enumerate(parts, start=1):
            prefix = f"({i}/{total})\n" if total > 1 else ""
            try:
                r = requests.post(
                    self.url,
                    json={"chat_id": self.chat_id, "text": prefix + part, "disable_web_page_preview": True},
                    timeout=self.timeout,
                )
            except requests.RequestException as e:
                logger.error(f"[TG] send failed: {e}")
                return False
            if r.status_code != 200:
                logger.error(f"[TG] failed {r.status_code}: {r.text}")
                ok = False
        if ok:
            logger.info(f"[TG] alert sent ({total} part(s))")
        return ok


def get_notifier(name: Optional[str] = None) -> Notifier:
    kind = (name or NOTIFIER).lower()
    if kind == "telegram":
        if TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID:
            return TelegramNotifier(TELEGRAM_BOT_TOKEN, TELEGRAM_CHAT_ID)
        logger.warning("Missing TELEGRAM_BOT_TOKEN/TELEGRAM_CHAT_ID -> log only")
    elif kind == "whatsapp":
        if WHATSAPP_API_URL and WHATSAPP_NUMBER:
            return WhatsAppNotifier(WHATSAPP_API_URL, WHATSAPP_NUMBER)
        logger.warning("Missing WHATSAPP_API_URL/WHATSAPP_NUMBER -> log only")
    return LogNotifier()
