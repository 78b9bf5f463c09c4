"""Per-connection conversation memory.

Each WebSocket connection owns one ``ConversationSession``. The session is
created when the channel opens and dropped when it closes; nothing is shared
across connections and nothing outlives the process.
"""

from __future__ import annotations

from typing import Dict, List, Literal, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from pydantic import BaseModel, Field


Role = Literal["user", "model"]


class Turn(BaseModel):
    role: Role = Field(..., description="'user' or 'model'")
    text: str

    def to_content(self) -> Dict:
        """Gemini `contents` entry: ``{"role": ..., "parts": [{"text": ...}]}``."""
        return {"role": self.role, "parts": [{"text": self.text}]}


class ConversationSession:
    """Append-only transcript sent in full on every generation call."""

    def __init__(self) -> None:
        self._turns: List[Turn] = []

    def __len__(self) -> int:
        return len(self._turns)

    @property
    def turns(self) -> Sequence[Turn]:
        return tuple(self._turns)

    def add_user_turn(self, text: str) -> Turn:
        turn = Turn(role="user", text=text)
        self._turns.append(turn)
        return turn

    def add_model_turn(self, text: str) -> Turn:
        turn = Turn(role="model", text=text)
        self._turns.append(turn)
        return turn

    def to_contents(self) -> List[Dict]:
        """Full transcript in the Gemini `contents` wire shape, oldest first."""
        return [turn.to_content() for turn in self._turns]

    def clear(self) -> None:
        self._turns.clear()


def to_lc_messages(turns: Sequence[Turn]) -> List[BaseMessage]:
    """Same transcript as ``to_contents``, as chat messages for ChatGoogleGenerativeAI."""
    messages: List[BaseMessage] = []
    for turn in turns:
        if turn.role == "model":
            messages.append(AIMessage(content=turn.text))
        else:
            messages.append(HumanMessage(content=turn.text))
    return messages
