from __future__ import annotations

from dataclasses import dataclass

from .models import MessageWindow


@dataclass(frozen=True)
class SendDecision:
    allowed: bool
    reason: str


class PolicyEngine:
    """Enforces the WhatsApp free-form vs. template send rule."""

    TEMPLATE = "template"
    SESSION_TEXT = "session_text"

    @staticmethod
    def evaluate_send(window: MessageWindow, message_type: str) -> SendDecision:
        if message_type == PolicyEngine.TEMPLATE:
            return SendDecision(True, "ok")

        if window.is_open:
            return SendDecision(True, "ok")

        return SendDecision(False, "template_required_outside_24h")
