from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional, Sequence

from langchain_core.messages import BaseMessage, SystemMessage
from langchain_core.runnables import Runnable
from langchain_google_genai import ChatGoogleGenerativeAI

from agent.core.memory import ConversationSession, Turn, to_lc_messages
from agent.core.prompt import SYSTEM_PROMPT
from agent.tools import build_builtin_tools
from config.settings import Settings, get_settings


logger = logging.getLogger("voli.agent")

ERROR_TEXT = "Error: Could not get a response from the AI."

ReplyStreamer = Callable[[Sequence[Turn]], AsyncIterator[str]]
Send = Callable[[str], Awaitable[None]]


class GenerationError(RuntimeError):
    """The generation call failed (network, service or stream error)."""


@dataclass(frozen=True)
class GenerationOptions:
    temperature: float = 0.85
    top_p: float = 0.85
    # -1 lets the model pick its own thinking budget per request
    thinking_budget: int = -1
    # single attempt, failures surface to the client immediately
    max_retries: int = 1
    tools: List[Dict[str, Any]] = field(default_factory=build_builtin_tools)
    system_instruction: str = SYSTEM_PROMPT


def _chunk_text(chunk: Any) -> str:
    content = getattr(chunk, "content", None)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type", "text") == "text":
                parts.append(block.get("text") or "")
        return "".join(parts)
    return ""


class GeminiStreamer:
    """Streams a Gemini reply for a full conversation transcript."""

    def __init__(self, llm: Runnable, options: GenerationOptions) -> None:
        self._llm = llm
        self.options = options

    def build_messages(self, turns: Sequence[Turn]) -> List[BaseMessage]:
        return [SystemMessage(content=self.options.system_instruction), *to_lc_messages(turns)]

    async def __call__(self, turns: Sequence[Turn]) -> AsyncIterator[str]:
        messages = self.build_messages(turns)
        try:
            async for chunk in self._llm.astream(messages):
                text = _chunk_text(chunk)
                if not text:
                    continue
                yield text
        except Exception as exc:
            raise GenerationError(f"Gemini streaming call failed: {exc}") from exc


def build_streamer(
    settings: Optional[Settings] = None,
    options: Optional[GenerationOptions] = None,
) -> GeminiStreamer:
    settings = settings or get_settings()
    options = options or GenerationOptions()
    if not settings.google_api_key:
        raise RuntimeError(
            "GEMINI_API_KEY not set. Please configure it in environment or .env"
        )

    llm = ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        google_api_key=settings.google_api_key,
        temperature=options.temperature,
        top_p=options.top_p,
        thinking_budget=options.thinking_budget,
        max_retries=options.max_retries,
    )
    logger.info(
        "Gemini streamer ready: model=%s key_set=%s tools=%s",
        settings.gemini_model,
        bool(settings.google_api_key),
        [next(iter(tool)) for tool in options.tools],
    )
    return GeminiStreamer(llm.bind_tools(options.tools), options)


async def relay_message(
    session: ConversationSession,
    text: str,
    send: Send,
    streamer: ReplyStreamer,
) -> Optional[str]:
    """Run one user message through the model and stream the reply back.

    Returns the full reply, or ``None`` when generation failed. On failure the
    user turn stays in the session and a single ``ERROR_TEXT`` frame is sent.
    """
    session.add_user_turn(text)

    reply = ""
    try:
        async for fragment in streamer(session.turns):
            reply += fragment
            await send(fragment)
    except Exception:
        logger.exception("Error generating content (history_turns=%s)", len(session))
        await send(ERROR_TEXT)
        return None

    session.add_model_turn(reply)
    logger.info("Model responded: %s chars, history_turns=%s", len(reply), len(session))
    return reply
