"""
Session change notifications (signed_in, signed_out, identity_updated).
Published on a Redis pub/sub channel so any process holding cached identity
state can subscribe and refresh it.
"""

import json
import logging
from collections.abc import AsyncIterator
from datetime import datetime, timezone
from typing import Any

from partmatch.cache.redis_client import get_redis, publish
from partmatch.config import get_settings

logger = logging.getLogger(__name__)

SIGNED_IN = "signed_in"
SIGNED_OUT = "signed_out"
IDENTITY_UPDATED = "identity_updated"


async def publish_session_event(event: str, user_id: str) -> bool:
    """Best-effort; returns False when the event could not be delivered to Redis."""
    message = {
        "event": event,
        "user_id": user_id,
        "at": datetime.now(timezone.utc).isoformat(),
    }
    return await publish(get_settings().session_events_channel, message)


async def session_events() -> AsyncIterator[dict[str, Any]]:
    """Yield session events as they are published. Runs until the caller stops iterating."""
    client = await get_redis()
    pubsub = client.pubsub()
    await pubsub.subscribe(get_settings().session_events_channel)
    try:
        async for message in pubsub.listen():
            if message.get("type") != "message":
                continue
            try:
                yield json.loads(message["data"])
            except (TypeError, ValueError):
                logger.warning("Ignoring malformed session event: %r", message.get("data"))
    finally:
        await pubsub.unsubscribe()
        await pubsub.aclose()
