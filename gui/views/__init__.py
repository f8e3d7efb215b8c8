"""Views selected by session mode."""

from __future__ import annotations

from typing import Optional, Union

from gui.state import Domain, SessionState
from gui.views.chat import ChatView, ChatViewModel
from gui.views.search import SearchView, SearchViewModel


def render_view(
    state: SessionState, *, history_window: Optional[int] = None
) -> Union[SearchViewModel, ChatViewModel]:
    if state.mode is Domain.ASSISTANT:
        view = ChatView() if history_window is None else ChatView(window=history_window)
        return view.render(state)
    return SearchView().render(state)
