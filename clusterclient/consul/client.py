from ..decoder import decode_list
from ..errors import NoHealthChecks
from ..service import ServiceClient
from .objects import HealthCheck


class ConsulClient(ServiceClient):
    """Reads service health from the Consul v1 HTTP API"""

    _PORT = 8500
    _VERSION = 'v1'

    @staticmethod
    def _parse_error(payload):
        # consul answers errors with plain text, never a JSON envelope
        return None

    def _make_check(self, data):
        return HealthCheck(client=self, data=data)

    def get_health_checks(self, service):
        """Return the checks registered for ``service`` across every node

        Args:
            service (str): The Consul service name

        Returns:
            list of HealthCheck

        Raises:
            clusterclient.errors.NoHealthChecks: Consul knows no checks for the service
            clusterclient.errors.RemoteError: Any other response than 200
            clusterclient.errors.DecodeError: The response was not a list of checks
        """
        (_, content) = self._single_request('GET', self._url('health', 'checks', service))

        checks = decode_list(content, self._make_check)
        if not checks:
            raise NoHealthChecks(service)

        return checks
