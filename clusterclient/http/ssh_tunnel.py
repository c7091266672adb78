import http.client
import logging
import os
import socket

import httplib2
import paramiko

from .transport import Transport

logger = logging.getLogger(__name__)

SCHEME = 'ssh+http'


class SSHTunnel(object):
    """Use paramiko to open "ssh -L" style channels to services behind an SSH host"""

    def __init__(
        self,
        host,
        username='core',
        port=22,
        timeout=10,
        known_hosts_file='~/.fleetctl/known_hosts',
        strict_host_key_checking=True
    ):
        """Connect to the SSH server, and authenticate

        Args:
            host (str or paramiko.transport.Transport): The hostname to connect to or an already connected Transport.
            username (str): The username to use when authenticating, defaults to 'core'.
            port (int): The port to connect to, defaults to 22.
            timeout (int): The timeout to wait for a connection in seconds, defaults to 10.
            known_hosts_file (str): A path to a known host file, ignored if strict_host_key_checking is False.
            strict_host_key_checking (bool): Verify host keys presented by remote machines before
            initiating SSH connections, defaults to True.

        Raises:
            ValueError: The host could not be resolved or reached, authentication failed, or
                        strict_host_key_checking was true but known_hosts_file didn't exist.
        """

        self.client = None
        self.transport = None

        # an already connected transport needs no further setup
        if isinstance(host, paramiko.transport.Transport):
            self.transport = host
            return

        self.client = paramiko.SSHClient()

        if strict_host_key_checking:
            try:
                self.client.load_system_host_keys(os.path.expanduser(known_hosts_file))
            except IOError:
                raise ValueError(
                    'Strict Host Key Checking is enabled, but hosts file ({0}) '
                    'does not exist or is unreadable.'.format(known_hosts_file)
                )
        else:
            self.client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        try:
            self.client.connect(
                host,
                port=port,
                username=username,
                banner_timeout=timeout,
            )
        except socket.gaierror:
            raise ValueError('{0} could not be resolved.'.format(host))
        except paramiko.ssh_exception.SSHException as exc:
            raise ValueError('Unable to connect via ssh: {0}: {1}'.format(
                exc.__class__.__name__,
                exc
            ))
        except socket.error as exc:
            raise ValueError('Unable to connect to {0}:{1}: {2}'.format(host, port, exc))

        logger.debug('ssh tunnel established to %s:%s as %s', host, port, username)

        self.transport = self.client.get_transport()

    def forward_tcp(self, host, port):
        """Open a connection to host:port via the ssh tunnel.

        Args:
            host (str): The host to connect to, as seen from the SSH server.
            port (int): The port to connect to.

        Returns:
            A socket-like object that is connected to the provided host:port.

        """

        return self.transport.open_channel(
            'direct-tcpip',
            (host, port),
            self.transport.getpeername()
        )

    def close(self):
        if self.client is not None:
            self.client.close()


class SSHTunnelProxyInfo(httplib2.ProxyInfo):
    def __init__(self, tunnel):
        """Carries an SSHTunnel to HTTPOverSSHTunnel through httplib2's proxy_info argument

        Args:
            tunnel (SSHTunnel): The tunnel new connections are opened through.

        """

        self.tunnel = tunnel


class HTTPOverSSHTunnel(http.client.HTTPConnection):
    """An HTTPConnection whose socket is a channel forwarded through an SSHTunnel

    httplib2 looks connection classes up by URL scheme; we register this one for ``ssh+http`` and hand it
    the tunnel via ``proxy_info``.
    """

    def __init__(self, host, port=None, timeout=None, proxy_info=None):
        """
        Args:
            host (str): The target '<host>:<port>', as seen from the SSH server
            port: ignored when ``host`` includes a port (exists for compatibility with parent)
            timeout: ignored (exists for compatibility with parent)
            proxy_info (SSHTunnelProxyInfo or callable returning one): Where the tunnel comes from.

        """

        http.client.HTTPConnection.__init__(self, host, port)

        # httplib2 passes proxy_info through untouched, which may be a callable
        if callable(proxy_info):
            proxy_info = proxy_info(SCHEME)

        if not isinstance(proxy_info, SSHTunnelProxyInfo) or not proxy_info.tunnel:
            raise ValueError('This Connection must be supplied an SSHTunnelProxyInfo via the proxy_info arg')

        self._tunnel_info = proxy_info

    def connect(self):
        """Open a fresh channel to the target through the tunnel"""
        self.sock = self._tunnel_info.tunnel.forward_tcp(self.host, self.port)


httplib2.SCHEME_TO_CONNECTION[SCHEME] = HTTPOverSSHTunnel


class SSHTunnelTransport(Transport):
    """A Transport whose requests are carried over an SSHTunnel

        >>> tunnel = SSHTunnel('bastion.example.com', username='core')
        >>> client = FleetClient(ClientConfig('127.0.0.1', transport=SSHTunnelTransport(tunnel)))

    The host in the client configuration is resolved by the SSH server, not locally.
    """

    def __init__(self, tunnel, timeout=None):
        """
        Args:
            tunnel (SSHTunnel): A connected tunnel.
            timeout (float, optional): Socket timeout for the httplib2.Http objects.
        """
        self.tunnel = tunnel

        super(SSHTunnelTransport, self).__init__(timeout=timeout)

    def _build_http(self):
        return httplib2.Http(timeout=self._timeout, proxy_info=SSHTunnelProxyInfo(self.tunnel))

    def _prepare_url(self, url):
        # route through HTTPOverSSHTunnel by swapping the scheme httplib2 dispatches on
        if url.startswith('http://'):
            return 'ssh+' + url

        return url
