"""Request models for the push endpoints.

Pub/Sub push subscriptions POST a JSON envelope wrapping one message whose
``data`` field carries the base64-encoded payload.

Example:
    {"message": {"data": "eyJkb21haW4iOiAiZXhhbXBsZS5jb20ifQ==",
                 "messageId": "123"},
     "subscription": "projects/demo/subscriptions/url-mapper"}
"""

import base64

from pydantic import BaseModel, ConfigDict, Field


class PushMessage(BaseModel):
    """Message wrapped in a push envelope.

    Attributes:
        data: Payload, normally base64-encoded
        message_id: Broker-assigned message identifier
        attributes: Message attributes set by the publisher
        publish_time: Time the broker accepted the message
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    data: str = ""
    message_id: str | None = Field(default=None, alias="messageId")
    attributes: dict[str, str] | None = None
    publish_time: str | None = Field(default=None, alias="publishTime")

    def payload(self) -> bytes:
        """Return the decoded payload.

        Base64 decoding is attempted first; data that is not valid base64 is
        used as raw bytes.
        """
        if not self.data:
            return b""
        try:
            return base64.b64decode(self.data, validate=True)
        except ValueError:
            # binascii.Error, or non-ASCII text that cannot be base64
            return self.data.encode("utf-8")


class PushEnvelope(BaseModel):
    """Body of a push delivery.

    A missing message is treated as an empty payload, which the services
    acknowledge and drop.
    """

    model_config = ConfigDict(extra="ignore")

    message: PushMessage = Field(default_factory=PushMessage)
    subscription: str | None = None
