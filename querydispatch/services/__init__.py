from querydispatch.services.debounce import Debouncer
from querydispatch.services.dispatcher import DispatchCoordinator, create_dispatcher
from querydispatch.services.exceptions import ControllerClosedError, ServiceError
from querydispatch.services.search import SearchExecutor, prefix_search
from querydispatch.services.throttle import Throttler

__all__ = [
    "ControllerClosedError",
    "Debouncer",
    "DispatchCoordinator",
    "SearchExecutor",
    "ServiceError",
    "Throttler",
    "create_dispatcher",
    "prefix_search",
]
