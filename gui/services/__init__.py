from . import settings_service  # noqa: F401
from .clients import get_backend
from .dispatch_service import BackendDispatcher, DispatchOutcome, FailureKind
from .icon_service import IconService
from .index_manager import IndexManager
from .query_debouncer import QueryDebouncer
from .search_service import build_result_set, is_application, normalize, rank
from .selection_service import SelectionController

__all__ = [
    "BackendDispatcher",
    "DispatchOutcome",
    "FailureKind",
    "IconService",
    "IndexManager",
    "QueryDebouncer",
    "SelectionController",
    "build_result_set",
    "get_backend",
    "is_application",
    "normalize",
    "rank",
]
