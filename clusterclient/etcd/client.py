import logging

from ..decoder import decode_object
from ..errors import DecodeError, NotFound
from ..http.transport import FORM
from ..service import ServiceClient
from .objects import Node

logger = logging.getLogger(__name__)


class EtcdClient(ServiceClient):
    """Key/value operations against the etcd v2 API"""

    _PORT = 2379
    _VERSION = 'v2'

    @staticmethod
    def _parse_error(payload):
        # {"errorCode": 100, "message": "Key not found", "cause": "/foo", "index": 7}
        if not isinstance(payload, dict) or 'errorCode' not in payload:
            return None

        message = payload.get('message', '')
        if payload.get('cause'):
            message = '{0} ({1})'.format(message, payload['cause'])

        return (payload['errorCode'], message)

    def _make_node(self, data):
        return Node(client=self, data=data)

    def get_key(self, path, recursive=False):
        """Return the node at ``path``

        Args:
            path (str): The key or directory, e.g. 'services/web'
            recursive (bool): Include every node below a directory

        Returns:
            Node

        Raises:
            clusterclient.errors.NotFound: The key does not exist
            clusterclient.errors.RemoteError: Any other response than 200
        """
        params = {'recursive': 'true'} if recursive else None

        (_, content) = self._single_request('GET', self._url('keys', path), params=params, errors={404: NotFound})

        response = decode_object(content, dict)
        return self._node_from(response, 'node', content)

    def recurse_keys(self, path):
        """Return the directory at ``path`` with every node below it"""
        return self.get_key(path, recursive=True)

    def set_key(self, path, value):
        """Set or update the value at ``path``

        Returns:
            Node: The previous node, None if the key did not exist before

        Raises:
            clusterclient.errors.RemoteError: Any other response than 200 or 201
        """
        (_, content) = self._single_request(
            'PUT',
            self._url('keys', path),
            body={'value': value},
            expected=(200, 201),
            content_type=FORM
        )

        logger.info('set %s on %s', path, self.config.host)

        response = decode_object(content, dict)
        if not response.get('prevNode'):
            return None

        return self._node_from(response, 'prevNode', content)

    def delete_key(self, path):
        """Delete the key at ``path``

        Returns:
            True: The key was deleted

        Raises:
            clusterclient.errors.NotFound: The key does not exist
            clusterclient.errors.RemoteError: Any other response than 200
        """
        self._single_request('DELETE', self._url('keys', path), errors={404: NotFound})

        logger.info('deleted %s on %s', path, self.config.host)

        return True

    def _node_from(self, response, key, content):
        if not isinstance(response.get(key), dict):
            raise DecodeError('etcd response has no {0} object'.format(key), content=content)

        return self._make_node(response[key])
