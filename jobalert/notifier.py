"""
Notification module
Sends job alerts to a single Telegram chat.
"""

import html
import requests
from typing import Optional
import logging

from .models import Job, NotifyResult

logger = logging.getLogger(__name__)

TELEGRAM_API = 'https://api.telegram.org'


def render_message(job: Job) -> str:
    """Render the HTML alert for one job"""
    return (
        "<b>🔥 New Relevant Internship / Job</b>\n"
        "\n"
        f"<b>{html.escape(job.title)}</b>\n"
        f"Company: {html.escape(job.company)}\n"
        f"Location: {html.escape(job.location)}\n"
        "\n"
        f"🔗 {html.escape(job.link)}\n"
    )


class TelegramNotifier:
    """Telegram notification class"""

    def __init__(self, bot_token: str, chat_id: str, timeout: float = 15,
                 session: Optional[requests.Session] = None):
        """
        Args:
            bot_token: Telegram bot token
            chat_id: Recipient chat id
            timeout: Request timeout in seconds
            session: Optional requests session (injected in tests)
        """
        self.chat_id = chat_id
        self.timeout = timeout
        self.url = f"{TELEGRAM_API}/bot{bot_token}/sendMessage"
        self.session = session or requests.Session()

    def send(self, text: str) -> NotifyResult:
        payload = {
            'chat_id': self.chat_id,
            'text': text,
            'parse_mode': 'HTML',
            'disable_web_page_preview': False,
        }
        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Telegram request failed: {e}")
            return NotifyResult(ok=False, reason=str(e))

        if not 200 <= response.status_code < 300:
            reason = f"HTTP {response.status_code}: {response.text[:200]}"
            logger.error(f"Telegram error: {reason}")
            return NotifyResult(ok=False, reason=reason)

        try:
            body = response.json()
        except ValueError:
            body = {}
        if isinstance(body, dict) and body.get('ok') is False:
            reason = body.get('description', 'Telegram returned ok=false')
            logger.error(f"Telegram error: {reason}")
            return NotifyResult(ok=False, reason=reason)

        return NotifyResult(ok=True)

    def notify(self, job: Job) -> NotifyResult:
        """Send an alert for one job"""
        result = self.send(render_message(job))
        if result.ok:
            logger.info(f"Telegram notification sent for job {job.id}")
        return result
