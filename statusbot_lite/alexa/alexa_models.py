"""Pydantic models for the inbound Alexa request envelope.

Only the fields the skill reads are modelled; everything else in the
envelope is ignored.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from statusbot_lite.alexa.alexa_exceptions import AlexaValidationError


class _AlexaModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class AlexaApplication(_AlexaModel):
    application_id: Optional[str] = Field(None, alias="applicationId")


class AlexaPermissions(_AlexaModel):
    consent_token: Optional[str] = Field(None, alias="consentToken")


class AlexaUser(_AlexaModel):
    user_id: Optional[str] = Field(None, alias="userId")
    access_token: Optional[str] = Field(None, alias="accessToken")
    permissions: Optional[AlexaPermissions] = None


class AlexaSession(_AlexaModel):
    new: bool = False
    session_id: Optional[str] = Field(None, alias="sessionId")
    application: Optional[AlexaApplication] = None
    user: Optional[AlexaUser] = None


class AlexaDevice(_AlexaModel):
    device_id: Optional[str] = Field(None, alias="deviceId")


class AlexaSystem(_AlexaModel):
    application: Optional[AlexaApplication] = None
    user: Optional[AlexaUser] = None
    device: Optional[AlexaDevice] = None
    api_endpoint: Optional[str] = Field(None, alias="apiEndpoint")
    api_access_token: Optional[str] = Field(None, alias="apiAccessToken")


class AlexaContext(_AlexaModel):
    system: Optional[AlexaSystem] = Field(None, alias="System")


class AlexaSlot(_AlexaModel):
    name: Optional[str] = None
    value: Optional[str] = None


class AlexaIntent(_AlexaModel):
    name: str
    slots: dict[str, AlexaSlot] = Field(default_factory=dict)


class AlexaRequest(_AlexaModel):
    type: str
    request_id: Optional[str] = Field(None, alias="requestId")
    locale: Optional[str] = None
    intent: Optional[AlexaIntent] = None


class AlexaRequestEnvelope(_AlexaModel):
    """A single Alexa skill invocation."""

    version: Optional[str] = None
    session: Optional[AlexaSession] = None
    context: Optional[AlexaContext] = None
    request: AlexaRequest

    @classmethod
    def from_event(cls, event: Any) -> AlexaRequestEnvelope:
        """Validate a raw event dict.

        Raises:
            AlexaValidationError: If the event is not a valid Alexa request
        """
        try:
            return cls.model_validate(event)
        except ValidationError as e:
            raise AlexaValidationError(f"Invalid Alexa request: {e}") from e

    @property
    def _system(self) -> AlexaSystem:
        if self.context and self.context.system:
            return self.context.system
        return AlexaSystem()

    @property
    def request_type(self) -> str:
        return self.request.type

    @property
    def intent_name(self) -> Optional[str]:
        return self.request.intent.name if self.request.intent else None

    @property
    def application_id(self) -> Optional[str]:
        if self.session and self.session.application and self.session.application.application_id:
            return self.session.application.application_id
        if self._system.application:
            return self._system.application.application_id
        return None

    @property
    def access_token(self) -> Optional[str]:
        """Account-linking token for the user's Slack account."""
        if self.session and self.session.user and self.session.user.access_token:
            return self.session.user.access_token
        if self._system.user:
            return self._system.user.access_token
        return None

    @property
    def device_id(self) -> Optional[str]:
        return self._system.device.device_id if self._system.device else None

    @property
    def consent_token(self) -> Optional[str]:
        """Token authorising reads of the device address."""
        user = self._system.user
        if user and user.permissions and user.permissions.consent_token:
            return user.permissions.consent_token
        return self._system.api_access_token

    @property
    def api_endpoint(self) -> Optional[str]:
        return self._system.api_endpoint

    def slot_value(self, name: str) -> Optional[str]:
        """Return a slot's spoken value, or None when absent or empty."""
        if not self.request.intent:
            return None
        slot = self.request.intent.slots.get(name)
        if slot is None or not slot.value:
            return None
        return slot.value
