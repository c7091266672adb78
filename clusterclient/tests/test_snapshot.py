import unittest

import threading
import time
import urllib.parse

import httplib2

from ..config import ClientConfig
from ..errors import ClusterClientError, RemoteError, TransportError
from ..fleet import FleetClient
from ..fleet.snapshot import assemble_snapshot, ClusterSnapshot
from ..http import Transport


class RoutingHttp(object):
    """Answers requests by path; safe to share between threads"""

    def __init__(self, routes):
        self.routes = routes
        self.paths = []
        self._lock = threading.Lock()

    def request(self, uri, method='GET', body=None, headers=None):
        path = urllib.parse.urlsplit(uri).path

        with self._lock:
            self.paths.append(path)

        (status, content) = self.routes[path]

        return (httplib2.Response({'status': status}), content.encode('utf-8'))


ROUTES = {
    '/fleet/v1/units': ('200', '{"units":[{"name":"a.service"},{"name":"b.service"}]}'),
    '/fleet/v1/state': ('200', '{"states":[{"name":"a.service"}]}'),
    '/fleet/v1/machines': ('200', '{"machines":[{"id":"m1"}]}'),
}


class TestAssembleSnapshot(unittest.TestCase):

    def test_sequential_order(self):
        """Listings run units, states, machines one after another"""
        calls = []

        def fetch(name):
            def fetcher():
                calls.append(name)
                return [name]
            return fetcher

        snapshot = assemble_snapshot(fetch('units'), fetch('states'), fetch('machines'))

        assert snapshot == ClusterSnapshot(units=['units'], unit_states=['states'], machines=['machines'])
        assert calls == ['units', 'states', 'machines']

    def test_sequential_stops_at_first_failure(self):
        calls = []

        def units():
            calls.append('units')
            raise ClusterClientError('boom')

        def states():
            calls.append('states')
            return []

        self.assertRaises(ClusterClientError, assemble_snapshot, units, states, states)
        assert calls == ['units']

    def test_concurrent_failure(self):
        """Any failed listing fails the snapshot"""
        def fail():
            raise TransportError('connection refused')

        self.assertRaises(TransportError, assemble_snapshot, list, list, fail, concurrent=True)

    def test_concurrent_first_failure_wins(self):
        """The listing that failed first is the one raised, whatever order they were started in"""
        machines_failed = threading.Event()

        def units():
            machines_failed.wait(5)
            time.sleep(0.2)
            raise TransportError('units: connection reset')

        def machines():
            try:
                raise RemoteError(500, 'registry unavailable')
            finally:
                machines_failed.set()

        with self.assertRaises(RemoteError) as context:
            assemble_snapshot(units, list, machines, concurrent=True)

        assert context.exception.message == 'registry unavailable'


class TestConcurrentClusterSnapshot(unittest.TestCase):

    def client(self, routes):
        self.http = RoutingHttp(routes)

        return FleetClient(ClientConfig('198.51.100.23', transport=Transport(http=self.http)))

    def test_concurrent(self):
        snapshot = self.client(ROUTES).get_cluster_snapshot(concurrent=True)

        assert [unit.name for unit in snapshot.units] == ['a.service', 'b.service']
        assert [state.name for state in snapshot.unit_states] == ['a.service']
        assert [machine.id for machine in snapshot.machines] == ['m1']

        assert sorted(self.http.paths) == sorted(ROUTES)

    def test_concurrent_fails_whole(self):
        routes = dict(ROUTES)
        routes['/fleet/v1/machines'] = ('500', '{"error":{"code":500,"message":"registry unavailable"}}')

        with self.assertRaises(RemoteError) as context:
            self.client(routes).get_cluster_snapshot(concurrent=True)

        assert context.exception.code == 500
