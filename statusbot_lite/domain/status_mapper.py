"""Keyword-based mapping from spoken status phrases to Slack profile status."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_EMOJI = ":speech_balloon:"
DO_NOT_DISTURB_TEXT = "Do not disturb"


@dataclass(frozen=True)
class StatusProfile:
    """Slack profile status: display text and emoji identifier."""

    text: str
    emoji: str

    @classmethod
    def cleared(cls) -> StatusProfile:
        return cls(text="", emoji="")

    def to_slack_profile(self) -> dict[str, str]:
        """Return the profile object expected by ``users.profile.set``."""
        return {"status_text": self.text, "status_emoji": self.emoji}


@dataclass(frozen=True)
class StatusRule:
    """A keyword and the status it produces.

    Attributes:
        keyword: Substring searched for in the spoken status
        emoji: Emoji identifier to set
        text_override: Replacement display text; None keeps the spoken status
    """

    keyword: str
    emoji: str
    text_override: Optional[str] = None


# Checked in order; the first rule whose keyword appears wins.
STATUS_RULES: tuple[StatusRule, ...] = (
    StatusRule("lunch", ":taco:"),
    StatusRule("coffee", ":coffee:"),
    StatusRule("busy", ":no_entry_sign:", text_override=DO_NOT_DISTURB_TEXT),
    StatusRule("errand", ":running:"),
    StatusRule("doctor", ":face_with_thermometer:"),
    StatusRule("away", ":no_entry_sign:"),
    StatusRule("call", ":slack_call:"),
    StatusRule("meeting", ":calendar:"),
    StatusRule("sick", ":face_with_thermometer:"),
    StatusRule("commuting", ":bus:"),
)


def match_status_rule(status: str) -> Optional[StatusRule]:
    for rule in STATUS_RULES:
        if rule.keyword in status:
            return rule
    return None


def emojify_status(status: str) -> StatusProfile:
    """Return the Slack status profile for a spoken status phrase.

    Examples:
        >>> emojify_status("in a meeting")
        StatusProfile(text='in a meeting', emoji=':calendar:')
        >>> emojify_status("busy")
        StatusProfile(text='Do not disturb', emoji=':no_entry_sign:')
    """
    rule = match_status_rule(status)
    if rule is None:
        return StatusProfile(text=status, emoji=DEFAULT_EMOJI)
    return StatusProfile(text=rule.text_override or status, emoji=rule.emoji)
