import logging

from .config import DEFAULT_MAX_PAGES
from .decoder import decode_error, decode_page, parse_fleet_error
from .errors import PaginationLimitExceeded

logger = logging.getLogger(__name__)


class Paginator(object):
    """Follow nextPageToken through every page of a listing

        >>> paginator = Paginator(transport, 'machines', Machine)
        >>> machines = paginator.fetch_all('http://198.51.100.23:49153/fleet/v1/machines')

    """

    def __init__(self, transport, items_key, factory, parse_envelope=parse_fleet_error, max_pages=DEFAULT_MAX_PAGES):
        """
        Args:
            transport: Anything implementing ``request(method, url, params)``
            items_key (str): The page key holding the records, e.g. 'units'
            factory (callable): Builds a record from each item dict
            parse_envelope (callable): Extracts (code, message) from the service's error body
            max_pages (int): Most pages fetched before giving up with PaginationLimitExceeded
        """
        self._transport = transport
        self._items_key = items_key
        self._factory = factory
        self._parse_envelope = parse_envelope
        self._max_pages = max_pages

    def pages(self, url, params=None):
        """Make a request with automatic pagination handling

        Args:
            url (str): The first page URL
            params (dict, optional): Query parameters sent with every page.
                                     'nextPageToken' is injected as needed, overwriting any value given here.

        Yields:
            Page: The next page of the listing

        Raises:
            clusterclient.errors.RemoteError: A page was answered with anything but 200
            clusterclient.errors.DecodeError: A page body was not a page of ``items_key``
            clusterclient.errors.TransportError: A page request failed
            clusterclient.errors.PaginationLimitExceeded: More than ``max_pages`` pages were offered
        """

        params = dict(params or {})
        params.pop('nextPageToken', None)

        fetched = 0
        while True:
            if fetched >= self._max_pages:
                raise PaginationLimitExceeded(url, self._max_pages)

            (status, content) = self._transport.request('GET', url, params=params)

            if status != 200:
                raise decode_error(status, content, self._parse_envelope)

            page = decode_page(content, self._items_key, self._factory)
            fetched += 1

            logger.debug('%s page %d: %d %s', url, fetched, len(page.items), self._items_key)

            yield page

            if not page.next_page_token:
                return

            params['nextPageToken'] = page.next_page_token

    def fetch_all(self, url, params=None):
        """Return every record of the listing, in the order the server enumerated them

        Raises the same errors as ``pages``; nothing is returned unless every page was fetched.
        """
        items = []
        for page in self.pages(url, params):
            items.extend(page.items)

        return items
