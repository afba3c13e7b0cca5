"""Test various aspects of Pages."""
from unittest import TestCase, mock
import mw_traverse as mw

def pages(page_data):
    """Wrap one page's data the way prop queries return it."""
    return {'batchcomplete': '', 'query': {'pages': {'15580374': page_data}}}

def revision(timestamp, content=None):
    """Make revision data for a prop=revisions response."""
    rev = {'revid': 100, 'parentid': 99, 'user': 'Someone',
           'timestamp': timestamp}
    if content is not None:
        rev['slots'] = {'main': {'contentmodel': 'wikitext', '*': content}}
    return rev

class TestTitles(TestCase):
    """Test title normalization and Page equality."""
    def test_normalize(self):
        """Assert underscores and extra spaces are normalized."""
        self.assertEqual('Main Page', mw.normalize_title('Main_Page'))
        self.assertEqual('A b', mw.normalize_title('  A__ b '))

    def test_equality(self):
        """Assert Pages compare by normalized title."""
        wiki = mw.Wiki('https://wiki.test/w/api.php', 'Test suite')
        self.assertEqual(wiki.page('Main_Page'), wiki.page('Main Page'))
        self.assertEqual(hash(wiki.page('Main_Page')),
                         hash(wiki.page('Main Page')))
        self.assertNotEqual(wiki.page('Main Page'), wiki.page('Main page'))
        self.assertNotEqual(wiki.page('Main Page'), 'Main Page')

    def test_pages_collection(self):
        """Assert Pages keeps order and duplicates."""
        wiki = mw.Wiki('https://wiki.test/w/api.php', 'Test suite')
        collection = mw.Pages()
        collection.add(wiki.page('A'))
        collection.extend([wiki.page('B'), wiki.page('A')])
        self.assertEqual(['A', 'B', 'A'], collection.titles())
        self.assertEqual(3, len(collection))
        self.assertEqual(wiki.page('B'), collection[1])
        self.assertEqual(['A', 'B', 'A'], [page.title for page in collection])
        self.assertIn(wiki.page('B'), collection)
        self.assertNotIn(wiki.page('C'), collection)
        self.assertEqual(mw.Pages([wiki.page('A'), wiki.page('B'),
                                   wiki.page('A')]), collection)

class TestPage(TestCase):
    """Test Page requests against a mocked Wiki.request."""
    def setUp(self):
        self.wiki = mw.Wiki('https://wiki.test/w/api.php', 'Test suite')
        self.page = self.wiki.page('Project:Sandbox')

    def test_read(self):
        """Assert read returns and caches the latest content."""
        with mock.patch.object(self.wiki, 'request', return_value=pages({
                'pageid': 1, 'ns': 4, 'title': 'Project:Sandbox',
                'revisions': [revision('2020-01-01T00:00:00Z', 'Hello')]
        })) as request:
            self.assertEqual('Hello', self.page.read())
            self.assertEqual('Hello', self.page.content)
        self.assertEqual(1, request.call_count)

    def test_read_missing(self):
        """Assert reading a missing page raises WikiError.missingtitle."""
        with mock.patch.object(self.wiki, 'request', return_value=pages({
                'ns': 4, 'title': 'Project:Sandbox', 'missing': ''})):
            with self.assertRaises(mw.WikiError.missingtitle):
                self.page.read()
        self.assertFalse(self.page)

    def test_info(self):
        """Assert info keeps the title and sets the other fields."""
        with mock.patch.object(self.wiki, 'request', return_value=pages({
                'pageid': 7, 'ns': 4, 'title': 'Project:SANDBOX',
                'length': 12})):
            self.page.info()
        self.assertEqual('Project:Sandbox', self.page.title)
        self.assertEqual(7, self.page.pageid)
        self.assertEqual(12, self.page.length)

    def test_getinfo(self):
        """Assert GETINFO makes new Pages request their info."""
        with mock.patch.object(self.wiki, 'request', return_value=pages({
                'pageid': 7, 'ns': 4, 'title': 'Project:Sandbox'})) as request:
            with mock.patch.object(mw, 'GETINFO', True):
                page = self.wiki.page('Project:Sandbox')
            self.wiki.page('Project:Sandbox')
        self.assertEqual(1, request.call_count)
        self.assertEqual(7, page.pageid)

    def test_revisions(self):
        """Assert revisions generates Revisions of this page."""
        with mock.patch.object(self.wiki, 'request', return_value=pages({
                'pageid': 1, 'ns': 4, 'title': 'Project:Sandbox',
                'revisions': [revision('2020-01-02T00:00:00Z', 'New'),
                              revision('2020-01-01T00:00:00Z', 'Old')]})):
            revs = list(self.page.revisions())
        self.assertEqual(2, len(revs))
        self.assertIsInstance(revs[0], mw.Revision)
        self.assertIs(self.page, revs[0].page)
        self.assertEqual('Old', revs[1].content)

    def test_categories(self):
        """Assert categories generates Pages in the Category namespace."""
        with mock.patch.object(self.wiki, 'request', return_value=pages({
                'pageid': 1, 'ns': 4, 'title': 'Project:Sandbox',
                'categories': [{'ns': 14, 'title': 'Category:Tests',
                                'sortkey': 'x'}]})):
            cats = list(self.page.categories())
        self.assertEqual([self.wiki.category('Tests')], cats)
        self.assertTrue(cats[0].is_category)

    def test_edit(self):
        """Assert edit posts the new text with a csrf token."""
        with mock.patch.object(self.wiki, 'request', side_effect=[
                pages({'title': 'Project:Sandbox', 'revisions': [
                    revision('2020-01-01T00:00:00Z', 'Old')]}),
                pages({'title': 'Project:Sandbox', 'revisions': [
                    revision('2020-01-01T00:00:00Z')]}),
                {'query': {'tokens': {'csrftoken': 'abc+\\'}}},
                {'edit': {'result': 'Success'}},
        ]) as request:
            self.page.read()
            result = self.page.edit('New', 'testing')
        self.assertEqual('Success', result['edit']['result'])
        edit = request.call_args_list[-1][1]
        self.assertTrue(edit['_post'])
        self.assertEqual('New', edit['text'])
        self.assertEqual('abc+\\', edit['token'])

    def test_edit_conflict(self):
        """Assert editing after someone else's newer edit raises."""
        with mock.patch.object(self.wiki, 'request', side_effect=[
                pages({'title': 'Project:Sandbox', 'revisions': [
                    revision('2020-01-01T00:00:00Z', 'Old')]}),
                pages({'title': 'Project:Sandbox', 'revisions': [
                    revision('2020-01-03T00:00:00Z')]}),
        ]):
            self.page.read()
            with self.assertRaises(mw.EditConflict):
                self.page.edit('New', 'testing')

    def test_edit_badtoken(self):
        """Assert a stale token is replaced once."""
        with mock.patch.object(self.wiki, 'request', side_effect=[
                pages({'title': 'Project:Sandbox', 'missing': ''}),
                {'query': {'tokens': {'csrftoken': 'old+\\'}}},
                mw.WikiError.badtoken('badtoken: Invalid CSRF token.'),
                {'query': {'tokens': {'csrftoken': 'new+\\'}}},
                {'edit': {'result': 'Success'}},
        ]) as request:
            self.page.edit('New', 'testing')
        self.assertEqual('new+\\', request.call_args_list[-1][1]['token'])

class TestUserRevision(TestCase):
    """Test Users and Revisions against a mocked Wiki.request."""
    def setUp(self):
        self.wiki = mw.Wiki('https://wiki.test/w/api.php', 'Test suite')

    def test_user_contribs(self):
        """Assert User.contribs generates Revisions of the edited pages."""
        with mock.patch.object(self.wiki, 'request', return_value={
                'query': {'usercontribs': [
                    {'userid': 5, 'user': 'Bot', 'pageid': 1, 'revid': 10,
                     'ns': 0, 'title': 'Foo_bar',
                     'timestamp': '2020-01-01T00:00:00Z'}]}}):
            revs = list(self.wiki.user('Bot').contribs())
        self.assertEqual([10], [rev.revid for rev in revs])
        self.assertEqual(self.wiki.page('Foo bar'), revs[0].page)

    def test_revision_read(self):
        """Assert Revision.read fetches the content of that revision."""
        rev = mw.Revision(self.wiki, 'Foo', revid=10)
        with mock.patch.object(self.wiki, 'request', return_value=pages({
                'title': 'Foo', 'revisions': [
                    {'revid': 10, 'slots': {'main': {'*': 'Text'}}}]})
        ) as request:
            self.assertEqual('Text', rev.content)
        self.assertEqual(10, request.call_args[1]['revids'])
        self.assertEqual(mw.Revision(self.wiki, 'Bar', revid=10), rev)

    def test_categorymembers(self):
        """Assert Page.categorymembers lists the members of that category."""
        with mock.patch.object(self.wiki, 'request', return_value={
                'query': {'categorymembers': [
                    {'pageid': 3, 'ns': 0, 'title': 'Lion'}]}}) as request:
            members = list(self.wiki.category('Cats').categorymembers())
        self.assertEqual([self.wiki.page('Lion')], members)
        self.assertEqual('Category:Cats', request.call_args[1]['cmtitle'])
