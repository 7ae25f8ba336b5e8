"""One-shot flash messages kept in the signed session cookie.

Messages are stored per category (``errors``, ``success``, ...) as lists of
``{"msg": ...}`` payloads and removed once read by the next rendered page.
"""

from typing import Any

from starlette.requests import Request

FLASH_SESSION_KEY = "_flashes"

Payload = dict[str, Any]


def flash(request: Request, category: str, payload: Payload | list[Payload]) -> None:
    """Queue one or more messages for the next page.

    Args:
        request: Current request (needs ``SessionMiddleware``)
        category: Message category, e.g. ``errors`` or ``success``
        payload: A single message payload or a list of them
    """
    messages = payload if isinstance(payload, list) else [payload]
    flashes = dict(request.session.get(FLASH_SESSION_KEY, {}))
    flashes[category] = [*flashes.get(category, []), *messages]
    # Reassign so the session middleware sees the change
    request.session[FLASH_SESSION_KEY] = flashes


def pop_flashes(request: Request) -> dict[str, list[Payload]]:
    """Return and clear every queued message, keyed by category."""
    return request.session.pop(FLASH_SESSION_KEY, {})
