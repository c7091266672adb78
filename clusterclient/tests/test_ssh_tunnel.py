import unittest
import mock

import os, socket, tempfile  # NOQA

import paramiko

from ..http import SSHTunnel, SSHTunnelTransport, SSHTunnelProxyInfo, HTTPOverSSHTunnel


class ForwardChecker(object):
    """A simple stand in for SSHTunnel when we don't actually want to connect to servers during tests"""
    def __init__(self, sock=None):
        self.sock = sock
        self.forwarded = []

    def forward_tcp(self, host, port):
        self.forwarded.append((host, port))
        return self.sock or [host, port]


class TestSSHTunnel(unittest.TestCase):

    def test_good_raw_transport(self):
        """Passing a raw transport to ssh tunnel skips other configuration"""
        t = mock.Mock(spec=paramiko.transport.Transport)

        s = SSHTunnel(host=t)

        assert s.client is None
        assert id(s.transport) == id(t)

    def test_bad_known_host_file(self):
        """If known_hosts_file doesn't exist but strict_host_key_checking is True, then a ValueError is raised"""
        tmpdir = tempfile.mkdtemp()

        bad_host_file = os.path.join(tmpdir, 'known_hosts')

        def test():
            SSHTunnel(host='foo', known_hosts_file=bad_host_file, strict_host_key_checking=True)

        os.rmdir(tmpdir)

        self.assertRaises(ValueError, test)

    def test_good_connect(self):
        """When we connect with a good client, the transport gets set correctly"""

        with mock.patch('paramiko.SSHClient'):
            s = SSHTunnel(host='foo', strict_host_key_checking=False)
            assert id(s.client.get_transport()) == id(s.transport)

            s.client.connect.assert_called_once_with('foo', port=22, username='core', banner_timeout=10)

    def test_connect_errors(self):
        """Resolution, connection and ssh errors all become ValueError"""

        for exc in [socket.gaierror(), socket.error(), paramiko.ssh_exception.SSHException('bad key')]:
            with mock.patch('paramiko.SSHClient') as client:
                client.return_value.connect.side_effect = exc

                def test():
                    SSHTunnel(host='unknown_host', strict_host_key_checking=False)

                self.assertRaises(ValueError, test)

    def test_forward_tcp(self):
        """Forwarding opens a direct-tcpip channel"""
        t = mock.Mock(spec=paramiko.transport.Transport)
        t.getpeername.return_value = ('203.0.113.1', 22)

        SSHTunnel(host=t).forward_tcp('198.51.100.23', 49153)

        t.open_channel.assert_called_once_with('direct-tcpip', ('198.51.100.23', 49153), ('203.0.113.1', 22))


class TestHTTPOverSSHTunnel(unittest.TestCase):

    def test_proxy_info_callable(self):
        """Passing a callable to proxy_info gets executed"""
        tunnel = ForwardChecker()

        h = HTTPOverSSHTunnel('foo:49153', proxy_info=lambda scheme: SSHTunnelProxyInfo(tunnel))
        h.connect()

        assert tunnel.forwarded == [('foo', 49153)]
        assert h.sock == ['foo', 49153]

    def test_proxy_info_data(self):
        """Passing proxy info directly works"""
        tunnel = ForwardChecker()

        h = HTTPOverSSHTunnel('foo:2379', proxy_info=SSHTunnelProxyInfo(tunnel))
        h.connect()

        assert h.sock == ['foo', 2379]

    def test_proxy_info_bad_object(self):
        """Passing anything other than proxy info causes an error"""

        def test():
            HTTPOverSSHTunnel('foo', proxy_info='lolz')

        self.assertRaises(ValueError, test)


class TestSSHTunnelTransport(unittest.TestCase):

    def test_prepare_url(self):
        """Plain http URLs are rerouted to the ssh+http connection class"""
        transport = SSHTunnelTransport(ForwardChecker())

        assert transport._prepare_url('http://foo:49153/fleet/v1/units') == 'ssh+http://foo:49153/fleet/v1/units'

    def test_request_through_tunnel(self):
        """A request is written to, and its response read from, the forwarded channel"""
        (ours, theirs) = socket.socketpair()

        try:
            theirs.sendall(
                b'HTTP/1.1 200 OK\r\n'
                b'Content-Type: application/json\r\n'
                b'Content-Length: 15\r\n'
                b'Connection: close\r\n'
                b'\r\n'
                b'{"machines":[]}'
            )

            tunnel = ForwardChecker(sock=ours)
            transport = SSHTunnelTransport(tunnel, timeout=5)

            (status, content) = transport.request('GET', 'http://198.51.100.23:49153/fleet/v1/machines')

            assert status == 200
            assert content == b'{"machines":[]}'
            assert tunnel.forwarded == [('198.51.100.23', 49153)]

            request = theirs.recv(4096)
            assert request.startswith(b'GET /fleet/v1/machines HTTP/1.1')
        finally:
            ours.close()
            theirs.close()
