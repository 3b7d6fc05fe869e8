import smtplib
import ssl
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formatdate, make_msgid, parseaddr
from socket import error as socket_error
from typing import Dict

import certifi
import requests

from daily_brief.config.settings import EMAIL_SETTINGS
from daily_brief.core.errors import EmailDeliveryError
from daily_brief.formatting.date_utils import brief_now, format_brief_date
from daily_brief.formatting.layout import BRIEF_TITLE, wrap_document
from daily_brief.formatting.text_utils import strip_html
from daily_brief.logging_cfg.logger import setup_logger
from daily_brief.utils.http import create_session

# Set up logger
logger = setup_logger()

SMTP_TIMEOUT = 30


def build_subject(now: datetime) -> str:
    return f"{BRIEF_TITLE} - {format_brief_date(now)}"


def build_message(document: str, settings, now: datetime = None) -> Dict[str, object]:
    """Assemble sender, recipients, subject and both body parts."""
    now = now or brief_now(settings.timezone)
    html = wrap_document(document, date=format_brief_date(now))
    return {
        'from': settings.email_sender,
        'to': list(settings.require('email_recipients')),
        'subject': build_subject(now),
        'html': html,
        'text': strip_html(document),
    }


def send_via_resend(message: Dict[str, object], settings, session=None) -> str:
    """Submit the message to the Resend email API and return its id.

    Raises:
        EmailDeliveryError: Transport failure, non-2xx, or an error field in the response
    """
    api_key = settings.require('resend_api_key')
    session = session or create_session()
    headers = {
        'Authorization': f"Bearer {api_key}",
        'Content-Type': 'application/json',
    }

    try:
        response = session.post(EMAIL_SETTINGS['resend_url'], json=message, headers=headers,
                                timeout=settings.http_timeout)
    except requests.exceptions.RequestException as e:
        raise EmailDeliveryError(f"Resend request failed: {e}") from e

    try:
        data = response.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}

    if not response.ok:
        raise EmailDeliveryError(f"Resend API error: {data.get('message') or response.reason or response.status_code}")

    error = data.get('error')
    if error:
        detail = error.get('message') if isinstance(error, dict) else error
        raise EmailDeliveryError(f"Resend API error: {detail}")

    return data.get('id', '')


def create_secure_smtp_context():
    """Create a secure SSL context for SMTP"""
    context = ssl.create_default_context(
        purpose=ssl.Purpose.SERVER_AUTH,
        cafile=certifi.where()
    )
    context.verify_mode = ssl.CERT_REQUIRED
    return context


def create_smtp_connection(settings):
    """Open an authenticated SMTP connection: implicit SSL on 465, STARTTLS otherwise."""
    host = settings.require('smtp_server')
    context = create_secure_smtp_context()
    if settings.smtp_port == 465:
        server = smtplib.SMTP_SSL(host, settings.smtp_port, timeout=SMTP_TIMEOUT, context=context)
    else:
        server = smtplib.SMTP(host, settings.smtp_port, timeout=SMTP_TIMEOUT)
        server.starttls(context=context)
    server.login(settings.require('smtp_username'), settings.require('smtp_password'))
    return server


def send_via_smtp(message: Dict[str, object], settings) -> str:
    """Send the message over SMTP and return its Message-ID.

    Raises:
        EmailDeliveryError: Connection, authentication or send failure
    """
    _, from_address = parseaddr(message['from'])
    msg = MIMEMultipart('alternative')
    msg['Subject'] = message['subject']
    msg['From'] = message['from']
    msg['To'] = ', '.join(message['to'])
    msg['Date'] = formatdate(localtime=True)
    msg['Message-ID'] = make_msgid(domain=from_address.split('@')[-1] or None)

    # Plain text first so clients prefer the HTML part
    msg.attach(MIMEText(message['text'], 'plain', 'utf-8'))
    msg.attach(MIMEText(message['html'], 'html', 'utf-8'))

    server = None
    try:
        server = create_smtp_connection(settings)
        refused = server.send_message(msg, from_addr=from_address, to_addrs=message['to'])
    except (socket_error, smtplib.SMTPException) as e:
        raise EmailDeliveryError(f"SMTP delivery failed: {e}") from e
    finally:
        if server:
            try:
                server.quit()
            except (socket_error, smtplib.SMTPException):
                logger.debug("SMTP connection already closed")

    if refused:
        raise EmailDeliveryError(f"SMTP server refused recipients: {', '.join(refused)}")
    return msg['Message-ID']


def deliver_brief(document: str, settings, now: datetime = None, session=None) -> str:
    """Email the brief to the configured recipients.

    Args:
        document: Generated HTML brief
        settings: Runtime settings (transport, sender, recipients, keys)
        now: Optional timestamp for the subject date, defaults to now in the brief timezone
        session: Optional requests session for the HTTP transport

    Returns:
        str: Provider message id

    Raises:
        EmailDeliveryError: The provider rejected the message
        ConfigurationError: Recipients or transport credentials are missing
    """
    message = build_message(document, settings, now=now)
    logger.info(f"Sending brief to {len(message['to'])} recipient(s) via {settings.email_transport}")

    if settings.email_transport == 'smtp':
        message_id = send_via_smtp(message, settings)
    else:
        message_id = send_via_resend(message, settings, session=session)

    logger.info("Email sent successfully")
    return message_id


__all__ = ['build_message', 'build_subject', 'deliver_brief', 'send_via_resend', 'send_via_smtp']
