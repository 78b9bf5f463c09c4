from __future__ import annotations

from functools import lru_cache
from typing import Dict

from fastapi import Depends, FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
import logging

from agent.agent import ReplyStreamer, build_streamer, relay_message
from agent.core.memory import ConversationSession
from config.settings import get_settings


settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="[%(asctime)s] %(levelname)s - %(message)s",
)
logger = logging.getLogger("voli")

app = FastAPI(title="Voli Chat Relay", version="1.0.0")

# CORS: allow local frontend during development
if settings.app_env.lower() in {"dev", "development", "local"}:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@lru_cache(maxsize=1)
def get_streamer() -> ReplyStreamer:
    return build_streamer()


async def _send_text(websocket: WebSocket, text: str) -> None:
    try:
        await websocket.send_text(text)
    except (WebSocketDisconnect, RuntimeError, OSError) as exc:
        # Client went away mid-reply; the generation still drains.
        logger.debug("Dropped outbound frame on closed socket: %s", exc)


@app.websocket("/chat")
async def chat_websocket(
    websocket: WebSocket,
    streamer: ReplyStreamer = Depends(get_streamer),
) -> None:
    await websocket.accept()
    session = ConversationSession()
    client = f"{websocket.client.host}:{websocket.client.port}" if websocket.client else "unknown"
    logger.info("WebSocket connection opened: client=%s", client)

    async def send(text: str) -> None:
        await _send_text(websocket, text)

    try:
        while True:
            message = await websocket.receive_text()
            logger.info("Received message: client=%s len=%s", client, len(message))
            await relay_message(session, message, send, streamer)
    except WebSocketDisconnect:
        logger.info("WebSocket connection closed: client=%s turns=%s", client, len(session))
    finally:
        session.clear()


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


# Registered last so /chat and /health take precedence.
app.mount(
    "/",
    StaticFiles(directory=settings.static_dir, html=True, check_dir=False),
    name="static",
)


def main() -> None:
    import uvicorn

    logger.info("Server running at http://localhost:%s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
