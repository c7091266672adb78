import logging
import urllib.parse

from .config import ClientConfig
from .decoder import decode_error, parse_fleet_error
from .http.transport import Transport, JSON
from .paginator import Paginator

logger = logging.getLogger(__name__)


class ServiceClient(object):
    """Shared plumbing for the per-service clients

    Subclasses set the defaults for their service and call ``_single_request`` / ``_paginator``; URL
    building, status checking and error decoding happen here once for all of them.
    """

    # path segment every endpoint lives under, e.g. 'fleet'
    _API = None
    _PORT = None
    _VERSION = None

    def __init__(self, config):
        """
        Args:
            config (ClientConfig or str): Where the service lives. A string is treated as ``ClientConfig(host)``.

        Raises:
            ValueError: The configuration is invalid
        """
        if not isinstance(config, ClientConfig):
            config = ClientConfig(config)

        self._config = config
        self._port = config.port or self._PORT
        self._version = config.api_version or self._VERSION

        if config.transport is not None:
            self._transport = config.transport
        else:
            self._transport = Transport(timeout=config.timeout)

        host = config.host
        if ':' in host:
            # IPv6 literals go back in brackets in URLs
            host = '[{0}]'.format(host)

        self._endpoint = 'http://{0}:{1}'.format(host, self._port)

    @property
    def config(self):
        return self._config

    def __repr__(self):
        return '<{0}: {1}>'.format(self.__class__.__name__, self._endpoint)

    def _url(self, *segments):
        """Build the URL for ``segments`` below this service's API root

        Each segment is percent-encoded, '/' and '@' are left alone so key paths and unit names survive.
        """
        path = [part for part in (self._API, self._version) if part]
        path.extend(urllib.parse.quote(str(segment).strip('/'), safe='/@:') for segment in segments)

        return '{0}/{1}'.format(self._endpoint, '/'.join(path))

    @staticmethod
    def _parse_error(payload):
        return parse_fleet_error(payload)

    def _single_request(self, method, url, params=None, body=None, expected=(200,), errors=None, content_type=JSON):
        """Make a single request and make sure it was answered with one of the ``expected`` statuses

        Args:
            method (str): The HTTP verb
            url (str): Built with ``_url``
            params (dict, optional): Query parameters
            body (optional): Request body, see Transport.request
            expected (tuple): Statuses meaning success
            errors (dict, optional): Maps failure statuses to RemoteError subclasses
            content_type (str): Body encoding

        Returns:
            two item tuple: (status, content)

        Raises:
            clusterclient.errors.RemoteError: The status was not in ``expected``
            clusterclient.errors.TransportError: No response was received
        """
        (status, content) = self._transport.request(method, url, params=params, body=body, content_type=content_type)

        if status not in expected:
            error = decode_error(status, content, self._parse_error, errors)
            logger.debug('%s %s failed: %r', method, url, error)
            raise error

        return (status, content)

    def _paginator(self, items_key, factory):
        return Paginator(
            self._transport,
            items_key,
            factory,
            parse_envelope=self._parse_error,
            max_pages=self._config.max_pages
        )
