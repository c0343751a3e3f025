"""Line-delimited JSON framing over stdio for an out-of-process embedded runtime.

Request:  ``{"id": "1", "channel": "app.channel", "message": {"method": "getDemoMode", "args": null}}``
Response: ``{"id": "1", "reply": [true]}`` (``"reply": null`` when not implemented)
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, TextIO

from loguru import logger

from hostbridge.channel.messenger import BinaryMessenger
from hostbridge.utils.exceptions import CodecError, sanitize_error_message


def encode_frame(frame: dict[str, Any]) -> str:
    """Encode a response frame into one line of JSON."""
    return json.dumps(frame, ensure_ascii=False)


def bad_frame(req_id: Any, message: str) -> dict[str, Any]:
    return {"id": req_id, "error": {"code": "BAD_FRAME", "message": message}}


def decode_reply(reply: bytes | None) -> Any:
    if not reply:
        return None
    try:
        return json.loads(reply.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CodecError(f"reply is not valid JSON: {exc}") from exc


class StdioBridgeServer:
    """Reads request frames, forwards them to a messenger, writes reply frames.

    Frames are handled strictly one after another so replies come back in
    request order.
    """

    def __init__(self, messenger: BinaryMessenger):
        self.messenger = messenger

    async def handle_line(self, line: str) -> dict[str, Any]:
        try:
            frame = json.loads(line)
        except json.JSONDecodeError as exc:
            return bad_frame("unknown", f"invalid JSON: {exc.msg}")
        if not isinstance(frame, dict):
            return bad_frame("unknown", "frame must be a JSON object")
        req_id = frame.get("id")
        if req_id is None:
            req_id = "unknown"
        channel = frame.get("channel")
        if not isinstance(channel, str) or not channel.strip():
            return bad_frame(req_id, "frame is missing 'channel'")
        message = frame.get("message")
        payload = json.dumps(message, ensure_ascii=False).encode("utf-8") if message is not None else None
        reply = await self.messenger.send(channel, payload)
        try:
            return {"id": req_id, "reply": decode_reply(reply)}
        except CodecError as exc:
            logger.warning("Dropping undecodable reply for frame {}: {}", req_id, exc.message)
            return bad_frame(req_id, sanitize_error_message(exc.message))

    async def serve(self, reader: TextIO, writer: TextIO) -> int:
        """Serve until EOF on ``reader``; returns the number of frames answered."""
        handled = 0
        logger.info("Serving engine {} over stdio", self.messenger.name)
        while True:
            line = await asyncio.to_thread(reader.readline)
            if not line:
                break
            if not line.strip():
                continue
            response = await self.handle_line(line)
            writer.write(encode_frame(response) + "\n")
            writer.flush()
            handled += 1
        logger.info("Stdio input closed after {} frames", handled)
        return handled
