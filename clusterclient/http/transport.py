import http.client
import json
import logging
import socket
import threading
import urllib.parse

import httplib2

from ..errors import TransportError

logger = logging.getLogger(__name__)

JSON = 'application/json'
FORM = 'application/x-www-form-urlencoded'


def merge_query(url, params=None):
    """Merge ``params`` into the query string already present on ``url``

    Keys in ``params`` replace keys of the same name already in the URL, keys with a value of None
    are dropped. This is what lets a continuation token be added to a filtered listing URL like
    ``/state?machineID=M`` without producing a second '?'.

    Args:
        url (str): An absolute URL, possibly with a query string
        params (dict, optional): Query parameters to add

    Returns:
        str: The URL with the merged, encoded query string
    """
    if not params:
        return url

    parts = urllib.parse.urlsplit(url)

    replaced = set(params)
    query = [
        (key, value) for (key, value) in urllib.parse.parse_qsl(parts.query, keep_blank_values=True)
        if key not in replaced
    ]

    for key, value in params.items():
        if value is None:
            continue
        query.append((key, str(value)))

    return urllib.parse.urlunsplit((
        parts.scheme,
        parts.netloc,
        parts.path,
        urllib.parse.urlencode(query),
        parts.fragment
    ))


class Transport(object):
    """Issue single HTTP requests through httplib2

    ``request`` returns the status and raw body of whatever the server answered; interpreting the status
    is left to the caller. Nothing is retried.
    """

    def __init__(self, http=None, timeout=None):
        """
        Args:
            http (httplib2.Http, optional): An instance of httplib2.Http (or something that acts like it) that
                HTTP requests will be made through. You do not need to pass this unless you need to configure
                specific options for your http client, or want to pass in a mock for testing.
                A shared instance is used as-is from every thread, so it must be safe to do so.

            timeout (float, optional): Socket timeout for the httplib2.Http objects built by this transport.
        """
        self._http = http
        self._timeout = timeout
        self._local = threading.local()

    def _get_http(self):
        """Return the http object for the calling thread

        httplib2.Http keeps per-connection state, so unless one was handed to us we build one per thread.
        """
        if self._http is not None:
            return self._http

        http = getattr(self._local, 'http', None)
        if http is None:
            http = self._local.http = self._build_http()

        return http

    def _build_http(self):
        return httplib2.Http(timeout=self._timeout)

    def _prepare_url(self, url):
        return url

    def request(self, method, url, params=None, body=None, content_type=JSON):
        """Make a single HTTP request

        Args:
            method (str): The HTTP verb, e.g. 'GET'
            url (str): Absolute URL to request
            params (dict, optional): Query parameters merged into ``url``
            body (optional): Serialized according to ``content_type``; JSON for any value, form encoding for dicts
            content_type (str, optional): ``JSON`` or ``FORM``

        Returns:
            two item tuple: (status (int), content (bytes))

        Raises:
            clusterclient.errors.TransportError: No response could be obtained
        """

        url = merge_query(url, params)

        headers = {}
        payload = None

        if body is not None:
            if content_type == FORM:
                payload = urllib.parse.urlencode(body)
            else:
                payload = json.dumps(body)

            headers['content-type'] = content_type

        logger.debug('%s %s', method, url)

        try:
            response, content = self._get_http().request(
                self._prepare_url(url),
                method=method,
                body=payload,
                headers=headers
            )
        except (httplib2.HttpLib2Error, socket.error, http.client.HTTPException) as exc:
            raise TransportError('{0} {1} failed: {2}'.format(method, url, exc), cause=exc) from exc

        if content is None:
            content = b''

        logger.debug('%s %s -> %s (%d bytes)', method, url, response.status, len(content))

        return (response.status, content)
