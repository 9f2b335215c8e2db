"""
Email Notifier

Sends a short summary email to a fixed inbox for every new signup.

Responsibility:
    - Build subject, plain-text and HTML bodies for customer/merchant records
    - Deliver over SMTP (implicit SSL by default, STARTTLS otherwise)
    - Wrap every delivery failure in UpstreamNotifyError

Architecture Notes:
    - Infrastructure Layer (implements NotifierProtocol from Application Layer)
    - Best-effort only: the dispatcher in the Application Layer swallows and
      logs UpstreamNotifyError, the HTTP response is never affected
    - Record values are HTML-escaped before interpolation
"""

import html
import logging
import smtplib
from email.message import EmailMessage

from src.domain.signup.entities import (
    CustomerSubmission,
    Submission,
)
from src.infrastructure.exceptions import UpstreamNotifyError
from src.shared.config import Settings

# Configure logger for this module
logger = logging.getLogger(__name__)

SENDER_NAME = "SnapShop"
SMTP_TIMEOUT_SECONDS = 10


def build_subject(record: Submission) -> str:
    """
    Subject line for a new record.

    Examples:
        >>> build_subject(customer)
        'New Customer Signup: Jo Lin'
    """
    if isinstance(record, CustomerSubmission):
        subject = f"New Customer Signup: {record.name}"
    else:
        subject = f"New Merchant Application: {record.business_name}"
    # Header values must stay on one line
    return " ".join(subject.split())


def _summary_rows(record: Submission) -> list[tuple[str, str]]:
    if isinstance(record, CustomerSubmission):
        return [
            ("Name", record.name),
            ("Email", record.email),
            ("Style", record.style),
            ("Budget", f"£{record.budget}"),
        ]
    return [
        ("Business", record.business_name),
        ("Contact", record.contact_name),
        ("Email", record.email),
        ("Category", record.category),
    ]


def build_text_body(record: Submission) -> str:
    rows = "\n".join(f"{label}: {value}" for label, value in _summary_rows(record))
    return f"{rows}\n\n-- SnapShop Notification\n"


def build_html_body(record: Submission) -> str:
    title = (
        "New Customer Signup"
        if isinstance(record, CustomerSubmission)
        else "New Merchant Application"
    )
    rows = "".join(
        f"<p><strong>{label}:</strong> {html.escape(value)}</p>"
        for label, value in _summary_rows(record)
    )
    return (
        '<div style="font-family:Arial,sans-serif;max-width:500px;">'
        f'<h2 style="color:#1A1A1A;">{title}</h2>'
        f"{rows}"
        '<hr><p style="color:#999;font-size:12px;">SnapShop Notification</p>'
        "</div>"
    )


class SmtpEmailNotifier:
    """
    SMTP notifier (Gmail app-password defaults).

    Examples:
        >>> notifier = SmtpEmailNotifier(
        ...     host="smtp.gmail.com", port=465, username="me@gmail.com",
        ...     password="app-password", recipient="inbox@example.com",
        ... )
        >>> notifier.notify(record)
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        recipient: str,
        use_ssl: bool = True,
        timeout: float = SMTP_TIMEOUT_SECONDS,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.recipient = recipient
        self.use_ssl = use_ssl
        self.timeout = timeout

    def build_message(self, record: Submission) -> EmailMessage:
        """Multipart message (plain text + HTML alternative)."""
        message = EmailMessage()
        message["Subject"] = build_subject(record)
        message["From"] = f'"{SENDER_NAME}" <{self.username}>'
        message["To"] = self.recipient
        message.set_content(build_text_body(record))
        message.add_alternative(build_html_body(record), subtype="html")
        return message

    def _connect(self) -> smtplib.SMTP:
        if self.use_ssl:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        smtp = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        smtp.starttls()
        return smtp

    def notify(self, record: Submission) -> None:
        """
        Send the notification email.

        Raises:
            UpstreamNotifyError: On a message build, SMTP or socket failure
        """
        try:
            message = self.build_message(record)
            with self._connect() as smtp:
                smtp.login(self.username, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            raise UpstreamNotifyError(
                f"Failed to send notification for {record.kind.value} {record.id}",
                original_error=e,
            )

        logger.info(f"Notification email sent for new {record.kind.value}")


class NullNotifier:
    """Notifier used when SMTP credentials are not configured."""

    def notify(self, record: Submission) -> None:
        logger.debug(f"Notifications not configured, skipping {record.kind.value} {record.id}")


def build_notifier(settings: Settings) -> "SmtpEmailNotifier | NullNotifier":
    """
    Build the notifier for this deployment.

    Returns:
        SmtpEmailNotifier when GMAIL_USER and GMAIL_APP_PASSWORD are set,
        NullNotifier otherwise
    """
    if not settings.notifications_configured:
        return NullNotifier()

    return SmtpEmailNotifier(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_user or "",
        password=settings.smtp_password or "",
        recipient=settings.notification_email,
        use_ssl=settings.smtp_use_ssl,
    )
