"""
See the Wiki docstrings.
"""
import logging
import re
from warnings import warn as _warn
import requests
from . import __version__
from .page import Page, User, normalize_title
from .excs import WikiError, WikiWarning
from .misc import Meta, _CachedAttribute
from .traverser import CategoryTraverser

logger = logging.getLogger(__name__)

_CATEGORY_PREFIX = re.compile(r'category\s*:\s*', re.IGNORECASE)

class Wiki(object):
    """The base class for a wiki. Sends API requests and makes Pages."""

    DEFAULT_USER_AGENT = 'mw_traverse/{} python-requests/{}'.format(
        __version__, requests.__version__)

    def __init__(self, api_url, user_agent=None, timeout=None):
        """Initialize a wiki with the URL of its api.php.

        If user_agent is specified, all requests will use that user agent.
        Otherwise, DEFAULT_USER_AGENT is used. ``timeout`` is passed to
        every request.
        """
        self.api_url = api_url
        if user_agent is not None:
            self.user_agent = user_agent
        else:
            self.user_agent = self.DEFAULT_USER_AGENT
        self.timeout = timeout
        self.meta = Meta(self)
        self._session = requests.Session()
        self.currentuser = None

    def __repr__(self):
        """Represent a Wiki object."""
        return "<Wiki at {addr}>".format(addr=self.api_url)

    __str__ = __repr__

    def __eq__(self, other):
        """Check if two Wikis are equal."""
        if not isinstance(other, Wiki):
            return NotImplemented
        return self.api_url == other.api_url

    def __hash__(self):
        """Wiki.__hash__() <==> hash(Wiki)"""
        return hash(self.api_url)

    @_CachedAttribute
    def wiki_url(self):
        """The server URL of the wiki, from siteinfo."""
        return self.meta.siteinfo()['server']

    def _generate(self, params, toyield, path):
        """Centralize generation of API data.

        Follows "continue" until the API stops sending one or, for a
        numeric limit, until that many items have been generated.
        ``path`` is the sequence of keys leading to the list of items;
        "__page" stands for the single entry of a "pages" mapping.
        """
        params = dict(params)
        limitkey = None
        for key in params:
            if key.endswith('limit'):
                limitkey = key
                break
        remaining = None
        if limitkey is not None and params[limitkey] not in (None, 'max'):
            remaining = int(params[limitkey])
            if remaining < 1:
                return

        while 1:
            data = rootdata = self.request(**params)

            try:
                for part in path:
                    if part == '__page':
                        data = tuple(data.values())[0]
                    else:
                        data = data[part]
            except (KeyError, IndexError):
                return #no such item, nothing to generate

            for thing in data:
                if '*' in thing:
                    thing['content'] = thing.pop('*')
                yield toyield(self, **thing)
                if remaining is not None:
                    remaining -= 1
                    if remaining < 1:
                        return

            if 'continue' not in rootdata:
                break
            params.update(rootdata['continue'])
            if remaining is not None:
                params[limitkey] = remaining

    @staticmethod
    def _encode(params):
        """Convert Python values to what the API expects."""
        result = {}
        for key, value in params.items():
            if value is None or value is False:
                continue
            if value is True:
                value = 1
            elif isinstance(value, (list, tuple)):
                value = '|'.join(str(i) for i in value)
            result[key] = value
        return result

    def _send(self, params, headers, files, post):
        if post:
            response = self._session.post(self.api_url, data=params,
                                          headers=headers, files=files,
                                          timeout=self.timeout)
        else:
            response = self._session.get(self.api_url, params=params,
                                         headers=headers,
                                         timeout=self.timeout)
        response.raise_for_status()
        return response

    def request(self, _headers=None, _post=False, files=None, **params):
        """Inner request method.

        Remains public since it might be used per se. Returns the decoded
        JSON response; raises WikiError.<code> if the API reports an error.
        """
        params = self._encode(params)
        params['format'] = 'json'

        headers = {
            'User-Agent': self.user_agent,
        }
        headers.update(_headers if _headers is not None else {})

        logger.debug('%s %s', 'POST' if _post else 'GET', params)
        try:
            response = self._send(params, headers, files, _post)
        except (requests.exceptions.ConnectionError,
                requests.exceptions.HTTPError) as exc:
            #try again as it may have been a one-time thing
            logger.warning('Request to %s failed (%s), retrying once',
                           self.api_url, exc)
            response = self._send(params, headers, files, _post)

        logger.debug('Response: %s', response.text)
        data = response.json()

        if 'error' in data:
            error = data['error']
            raise getattr(WikiError, error['code'])(
                error['code'] + ': ' + error.get('info', '')
            )

        for module, value in data.get('warnings', {}).items():
            _warn('warning from {} module: {}'.format(
                module,
                value.get('*', value) if isinstance(value, dict) else value
            ), WikiWarning)

        return data

    def post_request(self, **params):
        """Alias for Wiki.request(_post=True)"""
        return self.request(_post=True, **params)

    def login(self, username, password):
        """Log in with a username and password; the session keeps
        the cookies.
        """
        data = self.post_request(**{
            'action': 'login',
            'lgname': username,
            'lgpassword': password,
            'lgtoken': self.meta.tokens('login'),
        })['login']
        if data.get('result') != 'Success':
            raise WikiError.loginfailed(
                'loginfailed: ' + data.get('reason', data.get('result', ''))
            )
        self.meta.__dict__.pop('csrftoken', None)
        self.currentuser = User(self, name=username, getinfo=True)
        return data

    def logout(self):
        """Log out the current user."""
        token = self.meta.csrftoken
        self.currentuser = None
        self.meta.__dict__.pop('csrftoken', None)
        return self.post_request(action='logout', token=token)

    def page(self, title, **evil):
        """Return a Page instance based off of the title of the page."""
        if isinstance(title, Page):
            return title
        return Page(self, title=title, **evil)

    def category(self, title, **evil):
        """Return a Page instance based off of the title of the page
        with `Category:` prepended if it is not there already.

        The prefix is recognized in any case and with spaces around the
        colon; it is always written back as `Category:`.
        """
        if isinstance(title, Page):
            return title
        title = normalize_title(title)
        match = _CATEGORY_PREFIX.match(title)
        if match:
            title = title[match.end():]
        title = 'Category:' + title
        evil.setdefault('ns', 14)
        return Page(self, title=title, **evil)

    def user(self, name, **evil):
        """Return a User instance based off of the username."""
        if isinstance(name, User):
            return name
        return User(self, name=name, **evil)

    def categorymembers(self, title, limit='max', namespace=None, **evil):
        """Generate Pages in the category `title`, following continuations.

        `title` is a category title (with its prefix) or Page.
        Each Page has ``pageid``, ``ns`` and ``title`` set.
        """
        params = {
            'action': 'query',
            'list': 'categorymembers',
            'cmtitle': title.title if isinstance(title, Page) else title,
            'cmprop': 'ids|title|sortkey|type',
            'cmlimit': limit,
            'cmnamespace': namespace,
        }
        params.update(evil)
        return self._generate(
            params,
            Page,
            ('query', 'categorymembers'),
        )

    def search(self, term, limit=50, namespace=None, **evil):
        """Search pages for `term` and generate the Pages found.

        Specify `namespace` to only search in that/those namespace(s).
        """
        params = {
            'action': 'query',
            'list': 'search',
            'srsearch': term,
            'srnamespace': namespace,
            'srprop': 'size|wordcount|timestamp|snippet',
            'srlimit': limit,
        }
        params.update(evil)
        return self._generate(
            params,
            Page,
            ('query', 'search'),
        )

    def namespaces(self):
        """Return the site's namespaces as {id: info dict}."""
        data = self.meta.siteinfo('namespaces')
        return {int(key): value for key, value in data.items()}

    def traverser(self):
        """Return a new CategoryTraverser for this wiki."""
        return CategoryTraverser(self)
