"""Assistant view: recent conversation plus the current answer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from gui.components.status_bar import placeholder
from gui.state import ConversationTurn, SessionState
from gui.views.base import BaseView

PENDING_TEXT = "Thinking..."


@dataclass(frozen=True)
class ChatViewModel:
    placeholder: str
    query: str
    turns: List[ConversationTurn] = field(default_factory=list)
    response: Optional[str] = None
    pending: bool = False


@dataclass
class ChatView(BaseView):
    name: str = "chat"
    window: int = 5

    def render(self, state: SessionState) -> ChatViewModel:
        response = PENDING_TEXT if state.assistant_pending else state.response
        return ChatViewModel(
            placeholder=placeholder(state),
            query=state.query_text,
            turns=list(state.history.recent(self.window)),
            response=response,
            pending=state.assistant_pending,
        )
