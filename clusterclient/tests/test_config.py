import unittest

from ..config import ClientConfig, split_hostport, DEFAULT_MAX_PAGES


class TestSplitHostport(unittest.TestCase):

    def test_default_port(self):
        """Validate that when passing a default port it's used when no port is provided"""
        assert split_hostport('foo', default_port=916) == ('foo', 916)
        assert split_hostport('foo:22', default_port=916) == ('foo', 22)

    def test_no_port(self):
        """No port and no default leaves the port unset"""
        assert split_hostport('foo') == ('foo', None)

    def test_not_int(self):
        """ValueError is raised if a non number port is passed"""
        self.assertRaises(ValueError, split_hostport, 'foo:bar')

    def test_not_in_range(self):
        """ValueError is raised if port is out of range"""
        self.assertRaises(ValueError, split_hostport, 'foo:99999')
        self.assertRaises(ValueError, split_hostport, 'foo:0')

    def test_no_host(self):
        self.assertRaises(ValueError, split_hostport, ':49153')

    def test_ipv6(self):
        """Bracketed IPv6 addresses are split on the closing bracket"""
        assert split_hostport('[2001:db8::1]:49153') == ('2001:db8::1', 49153)
        assert split_hostport('[::1]', default_port=22) == ('::1', 22)
        assert split_hostport('[::1]') == ('::1', None)

    def test_ipv6_malformed(self):
        self.assertRaises(ValueError, split_hostport, '::1')
        self.assertRaises(ValueError, split_hostport, '2001:db8::1:49153')
        self.assertRaises(ValueError, split_hostport, '[::1')
        self.assertRaises(ValueError, split_hostport, '[::1]49153')
        self.assertRaises(ValueError, split_hostport, '[]:49153')


class TestClientConfig(unittest.TestCase):

    def test_defaults(self):
        config = ClientConfig('198.51.100.23')

        assert config.host == '198.51.100.23'
        assert config.port is None
        assert config.api_version is None
        assert config.transport is None
        assert config.timeout is None
        assert config.max_pages == DEFAULT_MAX_PAGES

    def test_port_in_host(self):
        """A port in the host string is used"""
        config = ClientConfig('198.51.100.23:4001')

        assert config.host == '198.51.100.23'
        assert config.port == 4001

    def test_explicit_port_wins(self):
        """An explicit port overrides the one in the host string"""
        config = ClientConfig('198.51.100.23:4001', port='49153')

        assert config.port == 49153

    def test_api_version_stripped(self):
        assert ClientConfig('foo', api_version='/v1/').api_version == 'v1'

    def test_invalid(self):
        """Bad values are refused at construction"""

        bad = [
            lambda: ClientConfig(''),
            lambda: ClientConfig('http://198.51.100.23:49153'),
            lambda: ClientConfig('foo', port=70000),
            lambda: ClientConfig('foo', timeout=0),
            lambda: ClientConfig('foo', max_pages=0),
            lambda: ClientConfig('foo', max_pages='10'),
            lambda: ClientConfig('foo', max_pages=True),
        ]

        for test in bad:
            self.assertRaises(ValueError, test)

    def test_repr(self):
        assert '198.51.100.23' in repr(ClientConfig('198.51.100.23', port=1))
