from collections import defaultdict
from lazymint.logger import get_logger

log = get_logger('Events')

TRANSFER = 'Transfer'
DEFAULT_HOLDER_CHANGED = 'DefaultHolderChanged'
APPROVAL = 'Approval'
APPROVAL_FOR_ALL = 'ApprovalForAll'

EVENTS = {TRANSFER, DEFAULT_HOLDER_CHANGED, APPROVAL, APPROVAL_FOR_ALL}


class EventHub:
    """
    Fire-and-forget notifications. Observers run after an operation has been
    committed; an observer raising does not undo the operation or stop the
    remaining observers.
    """
    def __init__(self):
        self._subscribers = defaultdict(list)

    def subscribe(self, event, callback):
        assert event in EVENTS, 'Unknown event {}. Known events are {}'.format(event, EVENTS)
        self._subscribers[event].append(callback)

    def unsubscribe(self, event, callback):
        try:
            self._subscribers[event].remove(callback)
        except ValueError:
            log.debug('{} was not subscribed to {}'.format(callback, event))

    def emit(self, event, **payload):
        log.debug('{} {}'.format(event, payload))

        for callback in list(self._subscribers[event]):
            try:
                callback(**payload)
            except Exception as e:
                log.error('Observer {} failed on {}: {}'.format(callback, event, e))
