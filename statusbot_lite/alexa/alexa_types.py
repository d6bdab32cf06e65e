"""Alexa response envelope builder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

ADDRESS_PERMISSION = "read::alexa:device:all:address:country_and_postal_code"

DEFAULT_REPROMPT = "I'm sorry, I didn't hear you. Could you say that again?"


def _output_speech(text: str, ssml: bool) -> dict[str, str]:
    if ssml:
        return {"type": "SSML", "ssml": f"<speak>{text}</speak>"}
    return {"type": "PlainText", "text": text}


@dataclass
class AlexaResponse:
    """One spoken response to a skill turn.

    Attributes:
        speech_text: Text (or SSML body when ``ssml`` is set) to speak; None for no speech
        should_end_session: Whether Alexa closes the session after speaking
        reprompt_text: Spoken if the user stays silent (ask responses only)
        card: Optional home-card payload (LinkAccount, AskForPermissionsConsent)
        ssml: Treat ``speech_text`` as an SSML fragment
    """

    speech_text: Optional[str]
    should_end_session: bool = True
    reprompt_text: Optional[str] = None
    card: Optional[dict[str, Any]] = None
    ssml: bool = False

    @classmethod
    def tell(cls, speech_text: str) -> AlexaResponse:
        """Speak and end the session."""
        return cls(speech_text)

    @classmethod
    def ask(
        cls, speech_text: str, reprompt_text: str = DEFAULT_REPROMPT, ssml: bool = False
    ) -> AlexaResponse:
        """Speak and keep the session open for the user's answer."""
        return cls(speech_text, should_end_session=False, reprompt_text=reprompt_text, ssml=ssml)

    @classmethod
    def tell_with_link_account_card(cls, speech_text: str) -> AlexaResponse:
        """Speak, end the session and push an account-linking card to the Alexa app."""
        return cls(speech_text, card={"type": "LinkAccount"})

    @classmethod
    def tell_with_permission_card(
        cls, speech_text: str, permissions: tuple[str, ...] = (ADDRESS_PERMISSION,)
    ) -> AlexaResponse:
        """Speak, end the session and ask for device permissions in the Alexa app."""
        return cls(
            speech_text,
            card={"type": "AskForPermissionsConsent", "permissions": list(permissions)},
        )

    @classmethod
    def empty(cls) -> AlexaResponse:
        """No speech; used for SessionEndedRequest."""
        return cls(None)

    def to_dict(self) -> dict[str, Any]:
        """Convert to Alexa response format."""
        response: dict[str, Any] = {}
        if self.speech_text is not None:
            response["outputSpeech"] = _output_speech(self.speech_text, self.ssml)
            response["shouldEndSession"] = self.should_end_session
        if self.reprompt_text is not None:
            response["reprompt"] = {"outputSpeech": _output_speech(self.reprompt_text, False)}
        if self.card is not None:
            response["card"] = self.card

        return {"version": "1.0", "response": response}
