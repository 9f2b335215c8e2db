"""
Notification Infrastructure Module

Exports:
    - SmtpEmailNotifier: Summary email over SMTP
    - NullNotifier: No-op notifier when credentials are missing
    - build_notifier: Notifier selection from Settings
"""

from .email_notifier import NullNotifier, SmtpEmailNotifier, build_notifier

__all__ = ["SmtpEmailNotifier", "NullNotifier", "build_notifier"]
