"""
A MediaWiki API client that can walk category trees.

Reads and edits pages, lists categories and their members, searches, and
collects every page below a category, however deeply nested.

Requires the ``requests`` library.

http://www.mediawiki.org/

Installation
============

From a checkout of the source::

    pip install -e .

To also install what the tests need::

    pip install -e .[test]

Example Usage
=============

.. code-block:: python

    import mw_traverse as mw

Get a page:

.. code-block:: python

    wp = mw.Wiki("https://en.wikipedia.org/w/api.php", "MyCoolBot/0.0.0")

    wp.login("kenny2wiki", password)

    sandbox = wp.page("User:Kenny2wiki/sandbox")

Edit page:

.. code-block:: python

    contents = sandbox.read()
    contents += "\\n This is a test!"
    sandbox.edit(contents, "Made a test edit")

List pages in category:

.. code-block:: python

    for page in wp.category("Redirects").categorymembers():
        print(page.title)

List every page below a category, including sub-categories:

.. code-block:: python

    traverser = wp.traverser()
    traverser.add_callback(mw.Callback.CATEGORY,
                           lambda cat, parent: print('Entering', cat.title))
    try:
        pages = traverser.descend(wp.category("Cats"))
    except mw.CategoryLoop as exc:
        print('Loop in the category tree:', exc.path)

Or, without callbacks:

.. code-block:: python

    pages = wp.category("Cats").descendants()

Requests are logged to the ``mw_traverse.wiki`` logger at DEBUG level,
traversal steps to ``mw_traverse.traverser``.

MIT Licensed.
"""

__version__ = '0.1.0'

GETINFO = False

from .excs import WikiError, WikiWarning, EditConflict, CategoryLoop
from .misc import Meta, GenericData, Pages
from .page import Page, User, Revision, normalize_title
from .callbacks import Callback, CallbackRegistry
from .traverser import (
    NamespaceClassifier, CategoryMemberLister, CategoryTraverser
)
from .wiki import Wiki

__all__ = [
    'GETINFO',
    'WikiError',
    'WikiWarning',
    'EditConflict',
    'CategoryLoop',
    'Wiki',
    'Meta',
    'GenericData',
    'Pages',
    'Page',
    'User',
    'Revision',
    'normalize_title',
    'Callback',
    'CallbackRegistry',
    'NamespaceClassifier',
    'CategoryMemberLister',
    'CategoryTraverser',
]
