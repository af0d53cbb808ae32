"""Best-effort "your notes are ready" mail.

All SMTP calls run in `asyncio.to_thread()` so the event loop never blocks on
the mail server. `notify()` returns immediately; delivery happens in a
detached task whose failures are only logged.
"""

from __future__ import annotations

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid
from pathlib import Path
from typing import Any, Coroutine

from smartsummary.config import MailConfig, Settings
from smartsummary.exceptions import NotificationError
from smartsummary.models.note import ANONYMOUS_EMAIL

logger = logging.getLogger(__name__)

_DEFAULT_IMAGE = Path(__file__).resolve().parents[1] / "assets" / "you-got-mail-email.gif"

_PLAIN_BODY = "Your meeting notes are ready"

_HTML_BODY = """\
<b>
  <h1>Welcome to Smart Summary</h1>
  <h2>Thanks for using SmartSummary. &#x2728;</h2>
  <p>Your meeting notes are ready. Please head over to your Dashboard at:
     <a href="{dashboard_url}">Dashboard</a> to view your notes.</p>
  <p style="text-align: center;">
    <img src="cid:{cid}" alt="You Got Mail" style="width: 450px; height: auto;">
  </p>
  <p>Happy Meetings!</p>
</b>
"""


class Notifier:
    def __init__(self, cfg: MailConfig) -> None:
        self.cfg = cfg
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def resolve_recipient(self, recipient_hint: str | None) -> str | None:
        if self.cfg.recipient:
            return self.cfg.recipient
        hint = str(recipient_hint or "").strip()
        if hint and hint != ANONYMOUS_EMAIL:
            return hint
        return None

    def _image_path(self) -> Path:
        if self.cfg.inline_image_path:
            return Path(self.cfg.inline_image_path)
        return _DEFAULT_IMAGE

    def build_message(self, recipient: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.cfg.sender or self.cfg.username
        msg["To"] = recipient
        msg["Subject"] = self.cfg.subject

        cid = make_msgid(idstring="mail-gif")
        msg.set_content(_PLAIN_BODY)
        msg.add_alternative(
            _HTML_BODY.format(dashboard_url=self.cfg.dashboard_url, cid=cid[1:-1]),
            subtype="html",
        )

        image_path = self._image_path()
        try:
            image = image_path.read_bytes()
        except OSError as exc:
            raise NotificationError(f"inline image unavailable: {image_path}") from exc
        html_part = msg.get_payload()[1]
        html_part.add_related(
            image,
            maintype="image",
            subtype="gif",
            cid=cid,
            filename=image_path.name,
            disposition="inline",
        )
        return msg

    def _deliver(self, msg: EmailMessage) -> None:
        cfg = self.cfg
        with smtplib.SMTP(cfg.host, cfg.port, timeout=cfg.timeout_s) as smtp:
            if cfg.use_starttls:
                smtp.starttls()
            if cfg.username and cfg.password:
                smtp.login(cfg.username, cfg.password)
            smtp.send_message(msg)

    async def send(self, recipient_hint: str | None) -> bool:
        """Send the notice now. Returns False when there is nobody to mail."""
        recipient = self.resolve_recipient(recipient_hint)
        if recipient is None:
            logger.info("no notification recipient configured; skipping mail")
            return False
        msg = self.build_message(recipient)
        logger.info("sending notification mail (to=%s)", recipient)
        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(f"mail transport failed: {exc}") from exc
        logger.info("notification mail sent (to=%s)", recipient)
        return True

    async def _send_logged(self, recipient_hint: str | None) -> None:
        try:
            await self.send(recipient_hint)
        except Exception:
            logger.exception("Error sending notification mail")

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        try:
            task = asyncio.get_running_loop().create_task(coro)
        except RuntimeError:
            coro.close()
            logger.warning("no running event loop; notification dropped")
            return
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def notify(self, recipient_hint: str | None) -> None:
        """Fire-and-forget delivery; never raises."""
        if not self.cfg.enabled:
            logger.debug("mail disabled; skipping notification")
            return
        self._spawn(self._send_logged(recipient_hint))

    async def drain(self) -> None:
        """Wait for in-flight notifications (used on shutdown and in tests)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


_NOTIFIER: Notifier | None = None


def init_notifier(settings: Settings) -> Notifier:
    global _NOTIFIER
    _NOTIFIER = Notifier(settings.mail)
    return _NOTIFIER


def get_notifier() -> Notifier:
    if _NOTIFIER is None:
        raise RuntimeError("notifier not initialized; call init_notifier() first")
    return _NOTIFIER


async def shutdown_notifier() -> None:
    global _NOTIFIER
    notifier = _NOTIFIER
    _NOTIFIER = None
    if notifier is not None:
        await notifier.drain()
