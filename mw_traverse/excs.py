"""
mw_traverse.excs - Exceptions raised by API requests and category traversal.

API error codes are available as attributes of ``WikiError``:

..code-block:: python

    try:
        page.edit(contents, 'summary')
    except mw.WikiError.protectedpage as exc:
        print('Page is protected:', exc)

A loop in a category tree is reported with ``CategoryLoop``:

..code-block:: python

    try:
        pages = wiki.traverser().descend(wiki.category('Foo'))
    except mw.CategoryLoop as exc:
        print('Loop:', exc.path)

Note that neither ``EditConflict`` nor ``CategoryLoop`` inherit from
WikiError.
"""

__all__ = [
    'WikiError',
    'WikiWarning',
    'EditConflict',
    'CategoryLoop',
]

class _MetaGetattr(type):
    """Metaclass that creates a subclass for every unknown attribute."""
    def __getattr__(cls, name):
        if name.startswith('_'):
            raise AttributeError(name)
        setattr(cls, name, type(name, (cls,), {}))
        return getattr(cls, name)

#pylint: disable=too-few-public-methods
class WikiError(Exception, metaclass=_MetaGetattr):
    """An error returned by the wiki's API. Raised by Wiki.request.

    ``WikiError.<code>`` is the subclass raised for API error ``<code>``.
    """
    @property
    def code(self):
        """Return the API error code."""
        return type(self).__name__

class WikiWarning(UserWarning, metaclass=_MetaGetattr):
    """The API sent a warning in the response."""

class EditConflict(Exception):
    """The last content fetch was before the most recent revision.

    Note: this exception does NOT inherit from WikiError! You must
    use it explicitly:
        try:
            page.edit(contents, summary)
        except (WikiError, EditConflict):
            print('API error or edit conflict')
    """

class CategoryLoop(Exception):
    """A category was reached again on the branch that led to it.

    ``path`` is the cycle, starting and ending with the category that
    closed it. ``branch`` holds every category of the branch in traversal
    order, from the root down to that category.
    """
    def __init__(self, branch):
        self.branch = branch
        pages = list(branch)
        if pages:
            pages = pages[pages.index(pages[-1]):]
        self.path = type(branch)(pages)
        super().__init__('Category loop detected: ' + ' -> '.join(
            page.title for page in self.path
        ))
