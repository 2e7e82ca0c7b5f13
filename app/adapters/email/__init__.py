"""Outbound e-mail adapter (optional collaborator)."""

from app.adapters.email.resend_client import ResendEmailSender, create_email_sender

__all__ = ["ResendEmailSender", "create_email_sender"]
