DEFAULT_MAX_PAGES = 1000


def split_hostport(hostport, default_port=None):
    """Split a string in the format of '<host>:<port>' into it's component parts

    default_port will be used if a port is not included in the string.
    IPv6 addresses must be enclosed in brackets, e.g. '[2001:db8::1]:49153', and are returned without them.

    Args:
        hostport (str '<host>', '<host>:<port>' or '[<ipv6>]:<port>'): A string to split into it's parts
        default_port (int, optional): The port to use when ``hostport`` has none

    Returns:
        two item tuple: (host, port). port is None if it wasn't in the string and no default was given

    Raises:
        ValueError: The string was empty, an IPv6 address wasn't bracketed, or the port was not a valid TCP port
    """

    if hostport.startswith('['):
        # [<ipv6>] or [<ipv6>]:<port>
        (host, bracket, rest) = hostport[1:].partition(']')
        if not bracket or (rest and not rest.startswith(':')):
            raise ValueError('Malformed IPv6 address: {0!r}'.format(hostport))

        port = rest[1:] if rest else default_port
    elif hostport.count(':') > 1:
        raise ValueError('IPv6 addresses must be enclosed in brackets, got {0!r}'.format(hostport))
    else:
        try:
            (host, port) = hostport.split(':', 1)
        except ValueError:  # no colon in the string, so fall back to the default
            host = hostport
            port = default_port

    if not host:
        raise ValueError('A host is required, got {0!r}'.format(hostport))

    if port is None:
        return (host, None)

    return (host, validate_port(port))


def validate_port(port):
    """Coerce ``port`` to an int and make sure it's in the TCP range

    Raises:
        ValueError: ``port`` is not a number between 1 and 65535
    """
    try:
        port = int(port)
        if port < 1 or port > 65535:
            raise ValueError()
    except (TypeError, ValueError):
        raise ValueError("{0} is not a valid TCP port".format(port))

    return port


class ClientConfig(object):
    """Connection settings for one service client

    Every client takes one of these instead of reading module level globals, so any number of
    independently configured clients can live in the same process.

        >>> config = ClientConfig('198.51.100.23')
        >>> FleetClient(config).list_machines()

    Attributes:
        host (str): Hostname or IP address of the service, without a scheme
        port (int): TCP port, or None to use the service's default
        api_version (str): API version path segment, or None to use the service's default
        transport: An object implementing ``request(method, url, params, body, content_type)``
                   or None to let the client build an httplib2 backed Transport
        timeout (float): Socket timeout in seconds for the default transport, None to block forever
        max_pages (int): Most pages a single paginated listing may fetch
    """

    def __init__(
        self,
        host,
        port=None,
        api_version=None,
        transport=None,
        timeout=None,
        max_pages=DEFAULT_MAX_PAGES
    ):
        """
        Args:
            host (str '<host>' or '<host>:<port>'): Where the service can be reached.
            port (int, optional): Overrides any port included in ``host``.
            api_version (str, optional): e.g. 'v1'.
            transport (optional): Injected transport, mostly useful for tests and ssh tunnels.
            timeout (float, optional): Passed to the default transport, ignored if ``transport`` is given.
            max_pages (int, optional): Ceiling for paginated listings, defaults to ``DEFAULT_MAX_PAGES``.

        Raises:
            ValueError: The host, port, timeout or max_pages is invalid
        """

        if not host or '://' in host:
            raise ValueError('host must be a hostname or address without a scheme, got {0!r}'.format(host))

        (self.host, split_port) = split_hostport(host.strip('/'))

        if port is not None:
            self.port = validate_port(port)
        else:
            self.port = split_port

        self.api_version = api_version.strip('/') if api_version else None
        self.transport = transport

        if timeout is not None and timeout <= 0:
            raise ValueError('timeout must be a positive number of seconds')
        self.timeout = timeout

        if isinstance(max_pages, bool) or not isinstance(max_pages, int) or max_pages < 1:
            raise ValueError('max_pages must be a positive integer, got {0!r}'.format(max_pages))
        self.max_pages = max_pages

    def __repr__(self):
        return '<{0}: host={1} port={2} api_version={3}>'.format(
            self.__class__.__name__,
            self.host,
            self.port,
            self.api_version
        )
