"""
This submodule contains the Page, User and Revision objects.
"""
# pylint: disable=method-hidden
import calendar
import functools
import re
import time
from .excs import WikiError, EditConflict
from .misc import _CachedAttribute
from .callbacks import Callback

__all__ = [
    'normalize_title',
    'Page',
    'User',
    'Revision',
]

CATEGORY_NS = 14

_SPACES = re.compile(r'[ _]+')

def normalize_title(title):
    """Normalize a title the way MediaWiki compares them:
    underscores are spaces, runs of spaces collapse, ends are stripped.
    """
    return _SPACES.sub(' ', title).strip()

def _timestamp(stamp):
    """Convert an API timestamp to seconds since the epoch (UTC)."""
    return calendar.timegm(time.strptime(stamp, '%Y-%m-%dT%H:%M:%SZ'))

def _default_getinfo():
    """Look up GETINFO at call time so that changing it takes effect."""
    from . import GETINFO
    return GETINFO

class Page(object):
    """The class for a page on a wiki.

    Must be initialized with a Wiki instance. Two Pages are equal when their
    normalized titles are; ``pageid`` and ``ns`` are set when the API
    reported them.

    Pages with the "missing" attribute set evaluate to False.
    """
    def __init__(self, wiki, title=None, getinfo=None, **data):
        """Initialize a page with its wiki and title.

        Any other keyword arguments (usually straight from an API
        response) become attributes.

        If `getinfo` is True, request page info for the page.
        If `getinfo` is None, use the module default (defined by GETINFO)
        """
        self.wiki = wiki
        self.title = None if title is None else normalize_title(title)
        self.pageid = None
        self.ns = None
        self.__dict__.update(data)
        if getinfo is None:
            getinfo = _default_getinfo()
        if getinfo:
            self.info()

    def __bool__(self):
        """Return whether the page exists - i.e., doesn't have the
        "missing" attribute.
        """
        return not hasattr(self, 'missing')

    def __repr__(self):
        """Represent a page instance."""
        return "<Page {name}>".format(name=self.title)

    __str__ = __repr__

    def __eq__(self, other):
        """Check if two pages are the same."""
        if not isinstance(other, Page):
            return NotImplemented
        return self.title == other.title

    def __hash__(self):
        """Page.__hash__() <==> hash(Page)"""
        return hash(self.title)

    @property
    def is_category(self):
        """Whether the page is in the default Category namespace."""
        return self.ns == CATEGORY_NS

    def info(self):
        """Query information about the page and update attributes."""
        data = self.wiki.request(**{
            'action': 'query',
            'titles': self.title,
            'prop': 'info',
            'inprop': 'protection|talkid|url|displaytitle',
        })
        page_data = tuple(data['query']['pages'].values())[0]
        page_data.pop('title', None) #don't override the title
        self.__dict__.update(page_data)
        return page_data

    _lasttimestamp = float('inf')

    def read(self):
        """Retrieve the page's content."""
        data = self.wiki.request(**{
            'action': 'query',
            'titles': self.title,
            'prop': 'revisions',
            'rvprop': 'content|timestamp',
            'rvlimit': 1,
            'rvslots': 'main',
        })
        page_data = tuple(data['query']['pages'].values())[0]
        if 'missing' in page_data or 'revisions' not in page_data:
            self.missing = True
            raise WikiError.missingtitle(
                'missingtitle', 'The page {} does not exist.'.format(self.title)
            )
        rev = page_data['revisions'][0]
        self._lasttimestamp = _timestamp(rev['timestamp'])
        self.content = rev['slots']['main']['*']
        return self.content

    @_CachedAttribute
    def content(self):
        """This property replaces itself when contents are fetched.
        To update this property, use ``read``.
        """
        return self.read()

    def edit(self, content, summary, erroronconflict=True, **evil):
        """Edit the page, replacing its content with `content`.

        Raises EditConflict if the page changed since it was last read.
        """
        try:
            rev = next(self.revisions(limit=1))
        except StopIteration:
            pass #the page doesn't exist, so we're creating it
        else:
            if erroronconflict \
                    and _timestamp(rev.timestamp) > self._lasttimestamp:
                raise EditConflict('The last fetch was before '
                                   'the most recent revision.')

        params = {
            'action': 'edit',
            'title': self.title,
            'token': self.wiki.meta.csrftoken,
            'text': content,
            'summary': summary,
            'bot': True,
        }
        params.update(evil)

        try:
            result = self.wiki.post_request(**params)
        except WikiError.badtoken:
            del self.wiki.meta.csrftoken
            params['token'] = self.wiki.meta.csrftoken
            result = self.wiki.post_request(**params)
        self.__dict__.pop('content', None)
        return result

    def revisions(self, limit='max', **evil):
        """Generate Revisions for this page, newest first.

        See https://www.mediawiki.org/wiki/API:Revisions for explanations
        of the various parameters.
        """
        params = {
            'action': 'query',
            'prop': 'revisions',
            'rvprop': 'ids|flags|timestamp|user|userid|size|comment|tags',
            'rvslots': 'main',
            'titles': self.title,
            'rvlimit': limit,
        }
        params.update(evil)
        return self.wiki._generate( #pylint: disable=protected-access
            params,
            functools.partial(Revision, page=self),
            ('query', 'pages', '__page', 'revisions'),
        )

    def categories(self, limit='max', **evil):
        """Generate the categories this page is in, as Pages."""
        params = {
            'action': 'query',
            'prop': 'categories',
            'titles': self.title,
            'clprop': 'sortkey|timestamp|hidden',
            'cllimit': limit,
        }
        params.update(evil)
        return self.wiki._generate( #pylint: disable=protected-access
            params,
            Page,
            ('query', 'pages', '__page', 'categories'),
        )

    def categorymembers(self, limit='max', namespace=None, **evil):
        """Generate Pages in this category."""
        return self.wiki.categorymembers(self.title, limit=limit,
                                         namespace=namespace, **evil)

    def descendants(self, on_category=None, on_page=None):
        """Return every non-category page below this category.

        ``on_category`` and ``on_page``, if given, are called with
        (member, parent) for each sub-category and page visited.
        See CategoryTraverser.descend for details.
        """
        traverser = self.wiki.traverser()
        if on_category is not None:
            traverser.add_callback(Callback.CATEGORY, on_category)
        if on_page is not None:
            traverser.add_callback(Callback.PAGE, on_page)
        return traverser.descend(self)

class User(object):
    """A user on a wiki."""
    def __init__(self, wiki, name=None, getinfo=None, **userinfo):
        """Initialize the instance with its wiki and update its info."""
        self.wiki = wiki
        self.name = name
        self.__dict__.update(userinfo)
        if getinfo is None:
            getinfo = _default_getinfo()
        if getinfo:
            self.info()

    def __repr__(self):
        """Represent a User."""
        return '<User {un}>'.format(un=self.name)

    __str__ = __repr__

    def __eq__(self, other):
        """Check if two users are the same."""
        if not isinstance(other, User):
            return NotImplemented
        return self.name == other.name

    def __hash__(self):
        """User.__hash__() <==> hash(User)"""
        return hash(self.name)

    def info(self):
        """Query the user's groups, rights and edit count."""
        data = self.wiki.request(**{
            'action': 'query',
            'list': 'users',
            'ususers': self.name,
            'usprop': 'blockinfo|groups|rights|editcount|registration',
        })
        user_data = data['query']['users'][0]
        self.__dict__.update(user_data)
        return user_data

    def contribs(self, limit='max', namespace=None, **evil):
        """Generate Revisions made by this user."""
        params = {
            'action': 'query',
            'list': 'usercontribs',
            'ucuser': self.name,
            'uclimit': limit,
            'ucnamespace': namespace,
            'ucprop': 'ids|title|timestamp|comment|size|flags|tags',
        }
        params.update(evil)
        return self.wiki._generate( #pylint: disable=protected-access
            params,
            lambda wiki, title=None, **rev: Revision(wiki, title, **rev),
            ('query', 'usercontribs'),
        )

class Revision(object):
    """The class for a revision of a page.

    Must be initialized with a Wiki and a Page (or title).
    """
    def __init__(self, wiki, page, revid=None, **data):
        """Initialize a revision with its wiki, page and ID."""
        self.wiki = wiki
        self.page = wiki.page(page)
        self.revid = revid
        self.__dict__.update(data)

    def __repr__(self):
        """Represent a revision of a page."""
        return "<Revision {revid} of page {name}>".format(
            revid=self.revid, name=self.page.title)

    __str__ = __repr__

    def __eq__(self, other):
        """Check if two revisions are the same."""
        if not isinstance(other, Revision):
            return NotImplemented
        return self.revid == other.revid

    def __hash__(self):
        """Revision.__hash__() <==> hash(Revision)"""
        return hash(self.revid)

    def read(self):
        """Retrieve the content of this revision."""
        data = self.wiki.request(**{
            'action': 'query',
            'prop': 'revisions',
            'revids': self.revid,
            'rvprop': 'content',
            'rvslots': 'main',
        })
        page_data = tuple(data['query']['pages'].values())[0]
        return page_data['revisions'][0]['slots']['main']['*']

    @_CachedAttribute
    def content(self):
        """The content of this revision.
        This is normally set when the request that made this Revision
        included the content.
        """
        if hasattr(self, 'slots'):
            return self.slots['main']['*']
        return self.read()
