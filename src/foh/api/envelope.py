from __future__ import annotations

import re

from fastapi.responses import Response

from foh.application.dto.responses import Envelope

JSON_MEDIA_TYPE = "application/json"
JAVASCRIPT_MEDIA_TYPE = "application/javascript"

_CALLBACK_NAME = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$")


def safe_callback(callback: str | None) -> str | None:
    if not callback:
        return None
    callback = callback.strip()
    if not _CALLBACK_NAME.match(callback):
        return None
    return callback


def render_envelope(envelope: Envelope, callback: str | None = None) -> Response:
    body = envelope.to_json()
    name = safe_callback(callback)
    if name is None:
        return Response(content=body, media_type=JSON_MEDIA_TYPE)
    return Response(content=f"{name}({body});", media_type=JAVASCRIPT_MEDIA_TYPE)
