"""Push endpoint shared by the mapper and processor applications.

Pub/Sub interprets the response status: 2xx acknowledges the message, any
other status schedules a redelivery.

Example:
    POST /
    Body: {"message": {"data": "<base64 payload>"}}
    Response: 200 "OK"
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from crawlrelay.api.models.requests import PushEnvelope
from crawlrelay.core.interfaces import PushHandler
from crawlrelay.services.errors import PipelineError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["push"])


@router.post("/", response_class=PlainTextResponse)
async def receive_push(request: Request) -> PlainTextResponse:
    """Decode a push envelope and hand its payload to the stage's service.

    Returns:
        200 when the message is processed or dropped as malformed,
        400 when the envelope cannot be parsed,
        500 when processing failed and the message should be redelivered.
    """
    body = await request.body()
    try:
        envelope = PushEnvelope.model_validate_json(body)
    except ValidationError as exc:
        logger.warning("Failed to decode push request: %s", exc)
        return PlainTextResponse(
            "Invalid request body", status_code=status.HTTP_400_BAD_REQUEST
        )

    handler: PushHandler = request.app.state.handler
    try:
        await handler.handle(envelope.message.payload())
    except PipelineError as exc:
        logger.error(
            "Error processing message %s: %s", envelope.message.message_id, exc
        )
        return PlainTextResponse(
            "Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return PlainTextResponse("OK")
