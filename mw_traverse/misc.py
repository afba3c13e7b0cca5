"""This submodule contains the small classes."""

__all__ = [
    'Meta',
    'GenericData',
    'Pages',
]

class _CachedAttribute(object): # pylint: disable=too-few-public-methods
    '''Computes attribute value and caches it in the instance.
    From the Python Cookbook (Denis Otkidach)
    The value is computed on first access and then stored on the instance,
    so ``del instance.attr`` makes the next access compute it again.
    '''
    def __init__(self, method, name=None):
        """Initialize the cached attribute."""
        self.method = method
        self.name = name or method.__name__
        self.__doc__ = method.__doc__

    def __get__(self, inst, cls):
        """Get the cached attribute."""
        if inst is None:
            # accessed on the class
            return self
        result = self.method(inst)
        # shadows this descriptor until deleted
        setattr(inst, self.name, result)
        return result

class Meta(object):
    """A separate class for the API "meta" module."""
    def __init__(self, wiki):
        """Initialize the instance with its wiki."""
        self.wiki = wiki

    def __repr__(self):
        """Represent the Meta instance (there should only ever be one!)."""
        return '<Meta>'

    __str__ = __repr__

    @_CachedAttribute
    def csrftoken(self):
        """Get a csrftoken. ``del meta.csrftoken`` forces a new one."""
        return self.tokens()

    def tokens(self, kind='csrf'):
        """Get a token for a database-modifying action.

        The parameter "kind" specifies the type. If more than one type is
        requested ("csrf|patrol"), return the dict of all of them.
        """
        data = self.wiki.request(**{
            'action': 'query',
            'meta': 'tokens',
            'type': kind,
        })
        if '|' in kind:
            return data['query']['tokens']
        return data['query']['tokens'][kind + 'token']

    def userinfo(self, prop=None):
        """Retrieve info about the currently logged-in user."""
        data = self.wiki.request(**{
            'action': 'query',
            'meta': 'userinfo',
            'uiprop': prop,
        })
        return data['query']['userinfo']

    def siteinfo(self, prop=None, **evil):
        """Retrieve information about the site.

        Only the first requested property is returned (``general`` if none
        is given). See https://www.mediawiki.org/wiki/API:Siteinfo for
        information about results.
        """
        params = {
            'action': 'query',
            'meta': 'siteinfo',
            'siprop': prop,
        }
        params.update(evil)
        data = self.wiki.request(**params)
        return tuple(data['query'].values())[0]

class GenericData(object): #pylint: disable=too-few-public-methods
    """A hunk of API data that does not deserve its own class."""
    def __init__(self, _, **data):
        """Initialize the data by copying kwargs to __dict__"""
        self.__dict__.update(data)

    def __repr__(self):
        """Represent some GenericData."""
        return '<GenericData: {!r}>'.format(self.__dict__)

    __str__ = __repr__

    def __getitem__(self, key):
        """Get an attribute like a dict item."""
        return self.__dict__[key]

    def __contains__(self, key):
        """Check for an attribute like a dict key."""
        return key in self.__dict__

class Pages(object):
    """An ordered collection of Pages.

    Unlike a set, the same page may be added more than once; membership
    is checked with page equality.
    """
    def __init__(self, pages=None):
        """Initialize the collection, optionally from an iterable of Pages."""
        self._pages = list(pages or ())

    def __repr__(self):
        """Represent the collection."""
        return '<Pages {!r}>'.format(self._pages)

    __str__ = __repr__

    def __iter__(self):
        """Pages.__iter__() <==> iter(Pages)"""
        return iter(self._pages)

    def __len__(self):
        """Pages.__len__() <==> len(Pages)"""
        return len(self._pages)

    def __getitem__(self, index):
        """Pages.__getitem__(index) <==> Pages[index]"""
        return self._pages[index]

    def __contains__(self, page):
        """Pages.__contains__(page) <==> page in Pages"""
        return page in self._pages

    def __eq__(self, other):
        """Two collections are equal if they hold equal pages in order."""
        if not isinstance(other, Pages):
            return NotImplemented
        return self._pages == other._pages

    __hash__ = None

    def add(self, page):
        """Append a page."""
        self._pages.append(page)

    def extend(self, pages):
        """Append every page of an iterable of Pages."""
        self._pages.extend(pages)

    def titles(self):
        """Return a list of the titles in this collection."""
        return [page.title for page in self._pages]
