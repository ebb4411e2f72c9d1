"""Notification utilities - email."""

from src.timetrack.core.notifications.email import (
    send_forgot_password_email,
    send_new_user_email,
)

__all__ = [
    "send_forgot_password_email",
    "send_new_user_email",
]
