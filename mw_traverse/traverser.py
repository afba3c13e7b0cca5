"""
mw_traverse.traverser - walking a category tree.

Example use:

.. code-block:: python

    >>> traverser = wiki.traverser()
    >>> traverser.add_callback(mw.Callback.CATEGORY,
    ...                        lambda cat, parent: print(parent, '>', cat))
    >>> pages = traverser.descend(wiki.category('Animals'))
    <Page Category:Animals> > <Page Category:Cats>
    >>> pages
    <Pages [<Page Lion>, <Page Tiger>, <Page Dog>]>

A page filed in several of the categories visited is returned once for
each of them.
"""
import logging
from .callbacks import Callback, CallbackRegistry
from .excs import CategoryLoop
from .misc import Pages
from .page import Page

__all__ = [
    'NamespaceClassifier',
    'CategoryMemberLister',
    'CategoryTraverser',
]

logger = logging.getLogger(__name__)

class NamespaceClassifier(object):
    """Decides whether a namespace is the Category namespace, using the
    site's namespace table.

    The table is requested the first time ``load`` is called and kept
    from then on. If the API answers without a namespace table, nothing
    is stored and every namespace is "not a category".
    """
    CANONICAL = 'Category'

    def __init__(self, wiki):
        self.wiki = wiki
        self._namespaces = None

    @property
    def namespaces(self):
        """The namespace table as {id: info dict}, or None if not loaded."""
        return self._namespaces

    def load(self):
        """Request the namespace table unless it is already loaded."""
        if self._namespaces is not None:
            return
        data = self.wiki.request(**{
            'action': 'query',
            'meta': 'siteinfo',
            'siprop': 'namespaces',
        })
        try:
            namespaces = {
                int(key): value
                for key, value in data['query']['namespaces'].items()
            }
        except (KeyError, TypeError, AttributeError, ValueError):
            logger.warning('No namespace table in siteinfo from %s; '
                           'no page will be treated as a category',
                           self.wiki)
            return
        logger.debug('Loaded %d namespaces', len(namespaces))
        self._namespaces = namespaces

    def is_category(self, ns):
        """Return True if namespace ``ns`` is the Category namespace."""
        try:
            info = self._namespaces[int(ns)]
        except (TypeError, ValueError, KeyError):
            return False
        return info.get('canonical') == self.CANONICAL

class CategoryMemberLister(object): #pylint: disable=too-few-public-methods
    """Lists the direct members of a category."""
    def __init__(self, wiki):
        self.wiki = wiki

    def members(self, category):
        """Return all members of ``category`` (a Page or title) as Pages,
        in the order the API lists them.
        """
        title = category.title if isinstance(category, Page) else category
        return Pages(self.wiki.categorymembers(title))

class CategoryTraverser(object):
    """Visits every page below a category, descending into
    sub-categories.

    Register callbacks with ``add_callback`` before calling ``descend``.
    The namespace table is only requested once per traverser, however
    many times ``descend`` is called.
    """
    CALLBACK_CATEGORY = Callback.CATEGORY
    CALLBACK_PAGE = Callback.PAGE

    def __init__(self, wiki):
        self.wiki = wiki
        self.classifier = NamespaceClassifier(wiki)
        self.lister = CategoryMemberLister(wiki)
        self.callbacks = CallbackRegistry()

    def __repr__(self):
        return '<CategoryTraverser of {!r}>'.format(self.wiki)

    __str__ = __repr__

    def add_callback(self, kind, callback):
        """Register ``callback`` to be called for each category or page
        visited.

        ``kind`` is Callback.CATEGORY or Callback.PAGE. The callback is
        called with the member visited and the category it was found in.
        Callbacks of the same kind are called in the order added.
        """
        self.callbacks.register(kind, callback)

    def descend(self, root):
        """Return every non-category page below the category ``root``
        (a Page or a category title) as Pages.

        Raises CategoryLoop if a category is reached again on the branch
        that led to it. Errors from the wiki or from a callback stop the
        traversal and propagate.
        """
        if isinstance(root, str):
            root = self.wiki.category(root)
        return self._descend(root, Pages(), set())

    def _descend(self, root, path, visited):
        """Descend into ``root``.

        ``path`` is the branch leading to ``root``; it is shared with the
        caller. ``visited`` holds the titles of every category entered
        during this traversal.
        """
        self.classifier.load()
        visited.add(root.title)
        path.add(root)

        members = self.lister.members(root)
        logger.debug('Descending into %s (%d members)',
                     root.title, len(members))

        descendants = Pages()
        for member in members:
            if not self.classifier.is_category(member.ns):
                descendants.add(member)
                self.callbacks.dispatch(Callback.PAGE, member, root)
                continue

            if member in path:
                path.add(member)
                raise CategoryLoop(path)
            if member.title in visited:
                logger.debug('Skipping %s, already visited', member.title)
                continue

            self.callbacks.dispatch(Callback.CATEGORY, member, root)
            descendants.extend(self._descend(member, path, visited))
            # siblings start a new branch
            path = Pages()
        return descendants
