"""
mw_traverse.callbacks - observers for category traversal.

Handlers are plain callables taking ``(member, parent)``; their return
value is ignored. A handler that raises aborts the traversal.
"""
import enum

__all__ = [
    'Callback',
    'CallbackRegistry',
]

class Callback(enum.Enum):
    """The kinds of node a traversal reports."""
    CATEGORY = 10
    PAGE = 20

class CallbackRegistry(object):
    """Handlers per Callback kind, called in the order registered."""
    def __init__(self):
        self._handlers = {kind: [] for kind in Callback}

    def __repr__(self):
        return '<CallbackRegistry {}>'.format(', '.join(
            '{}: {}'.format(kind.name, len(handlers))
            for kind, handlers in self._handlers.items()
        ))

    __str__ = __repr__

    def __len__(self):
        return sum(len(handlers) for handlers in self._handlers.values())

    def _check(self, kind):
        if not isinstance(kind, Callback):
            raise ValueError('Unknown callback kind: {!r}'.format(kind))

    def register(self, kind, func):
        """Add a handler for ``kind``. Registering twice calls it twice."""
        self._check(kind)
        if not callable(func):
            raise TypeError('Callback is not callable: {!r}'.format(func))
        self._handlers[kind].append(func)

    def handlers(self, kind):
        """Return a copy of the handlers registered for ``kind``."""
        self._check(kind)
        return list(self._handlers[kind])

    def dispatch(self, kind, *args):
        """Call every handler for ``kind`` with ``args``."""
        self._check(kind)
        for func in self._handlers[kind]:
            func(*args)
