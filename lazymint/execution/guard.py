from contextlib import ContextDecorator
from functools import wraps
from lazymint.exceptions import Reentrant
from lazymint.logger import get_logger

log = get_logger('Guard')


class ReentrancyGuard(ContextDecorator):
    """
    Mutation lock owned by a single token instance. Entering while another
    mutating operation holds the lock raises Reentrant; leaving always releases,
    whether the body returned or raised.
    """
    def __init__(self):
        self._entered = False

    @property
    def entered(self):
        return self._entered

    def __enter__(self):
        if self._entered:
            log.warning('Rejected reentrant call')
            raise Reentrant()

        self._entered = True
        return self

    def __exit__(self, *args, **kwargs):
        self._entered = False
        return False


def nonreentrant(func):
    """Runs a method under the instance's `_guard`."""
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        with self._guard:
            return func(self, *args, **kwargs)

    return wrapper
