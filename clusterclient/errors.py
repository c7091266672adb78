class ClusterClientError(Exception):
    """Base class for every error raised by clusterclient"""


class TransportError(ClusterClientError):
    """The request never produced an HTTP response

    Raised for DNS failures, refused or reset connections, timeouts and malformed requests.
    These are never retried.

    Attributes:
        message (str): A description of the failure
        cause (Exception): The exception raised by the underlying HTTP library
    """
    def __init__(self, message, cause=None):
        super(TransportError, self).__init__(message)

        self.message = message
        self.cause = cause

    def __str__(self):
        return self.message


class DecodeError(ClusterClientError):
    """A response body did not match the shape expected from the endpoint

    Attributes:
        message (str): What was wrong with the body
        content (bytes): The raw body that failed to decode
    """
    def __init__(self, message, content=None):
        super(DecodeError, self).__init__(message)

        self.message = message
        self.content = content

    def __str__(self):
        return self.message


class RemoteError(ClusterClientError):
    """Represents an error returned in a response to an API call

    Attributes:
        code (int): The error code reported by the service, or the HTTP status when it didn't report one
        message (str): The message included with the error response
        status (int): The HTTP status of the response
    """
    def __init__(self, code, message, status=None):
        """Construct an exception representing an error returned by a service

        Args:
            code (int): The error code
            message (str): The message included with the error response
            status (int, optional): The HTTP status, defaults to ``code``
        """
        super(RemoteError, self).__init__(code, message)

        self.code = code
        self.message = message
        self.status = code if status is None else status

    def __str__(self):
        # r'404: unit does not exist'
        return '{0}: {1}'.format(
            self.code,
            self.message
        )

    def __repr__(self):
        # r'<NotFound; Code: 404; Message: unit does not exist>'
        return '<{0}; Code: {1}; Message: {2}>'.format(
            self.__class__.__name__,
            self.code,
            self.message
        )


class BadParameters(RemoteError):
    """The service rejected the request parameters (400)"""


class NotFound(RemoteError):
    """The requested resource does not exist (404)"""


class Conflict(RemoteError):
    """The request conflicts with the current state of the resource (409)"""


class NameConflict(Conflict):
    """A unit with the requested name already exists (409 on create)"""


class PaginationLimitExceeded(ClusterClientError):
    """A paginated endpoint kept returning continuation tokens past the configured page ceiling

    Attributes:
        url (str): The first page URL of the listing
        max_pages (int): The ceiling that was hit
    """
    def __init__(self, url, max_pages):
        super(PaginationLimitExceeded, self).__init__(url, max_pages)

        self.url = url
        self.max_pages = max_pages

    def __str__(self):
        return 'Gave up on {0} after {1} pages; the server never returned an empty nextPageToken'.format(
            self.url,
            self.max_pages
        )


class NoHealthChecks(ClusterClientError):
    """Consul answered successfully but reported no checks for a service"""
    def __init__(self, service):
        super(NoHealthChecks, self).__init__(service)

        self.service = service

    def __str__(self):
        return 'Consul returned 0 checks for {0}.'.format(self.service)
