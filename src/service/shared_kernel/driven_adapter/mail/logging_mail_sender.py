from datetime import datetime, timezone
from typing import List, Optional

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.app.interface.i_mail_sender import IMailSender


class LoggingMailSender(IMailSender):
    """Writes mail to the log instead of an SMTP relay and keeps a copy for inspection"""

    def __init__(self, *, sender: str = settings.MAIL_SENDER) -> None:
        self.sender = sender
        self.sent_emails: List[dict] = []

    @Logger.io
    async def send_email(
        self, *, to: str, subject: str, body: str, cc: Optional[List[str]] = None
    ) -> bool:
        email_data = {
            'from': self.sender,
            'to': to,
            'subject': subject,
            'body': body,
            'cc': cc or [],
            'sent_at': datetime.now(timezone.utc),
        }
        self.sent_emails.append(email_data)

        Logger.base.info(f'📧 [MAIL] {self.sender} -> {to}: {subject}')
        return True
