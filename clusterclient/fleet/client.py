import logging

from ..decoder import decode_object
from ..errors import BadParameters, NameConflict, NotFound
from ..service import ServiceClient
from .correlator import correlate, filter_by_base_name
from .objects import Machine, Unit, UnitState, STATES
from .snapshot import assemble_snapshot

logger = logging.getLogger(__name__)


class FleetClient(ServiceClient):
    """A python wrapper for the fleet v1 API

    The fleet v1 API is documented here: https://github.com/coreos/fleet/blob/master/Documentation/api-v1.md

        >>> fleet = FleetClient(ClientConfig('198.51.100.23'))
        >>> template, instances = fleet.list_units_by_name('web')

    Listings follow nextPageToken until the last page and return complete lists.

    """

    _API = 'fleet'
    _PORT = 49153
    _VERSION = 'v1'
    _STATES = STATES

    def _unit_name(self, unit):
        # if we are given an object, grab it's name property
        if isinstance(unit, Unit):
            return unit.name

        return str(unit)

    def _make_unit(self, data):
        return Unit(client=self, data=data)

    def _make_state(self, data):
        return UnitState(client=self, data=data)

    def _make_machine(self, data):
        return Machine(client=self, data=data)

    def create_unit(self, name, unit):
        """Create a new Unit in the cluster

        Create and modify Unit entities to communicate to fleet the desired state of the cluster.
        This simply declares what should be happening; the backend system still has to react to
        the changes in this desired state. The actual state of the system is communicated with
        UnitState entities.

        Args:
            name (str): The name of the unit to create
            unit (Unit): The unit to submit to fleet

        Returns:
            True: fleet created the unit

        Raises:
            clusterclient.errors.BadParameters: fleet rejected the unit (400)
            clusterclient.errors.NameConflict: A unit with this name already exists (409)
            clusterclient.errors.RemoteError: Any other response than 201

        """

        self._single_request('PUT', self._url('units', name), body={
            'desiredState': unit.desiredState,
            'options': unit.options
        }, expected=(201,), errors={400: BadParameters, 409: NameConflict})

        logger.info('created unit %s (desiredState=%s)', name, unit.desiredState)

        return True

    def set_unit_desired_state(self, unit, desired_state):
        """Update the desired state of a unit running in the cluster

        Args:
            unit (str, Unit): The Unit, or name of the unit to update

            desired_state: State the user wishes the Unit to be in
                          ("inactive", "loaded", or "launched")
        Returns:
            True: fleet accepted the new desired state

        Raises:
            clusterclient.errors.BadParameters: fleet rejected the request (400)
            clusterclient.errors.RemoteError: Any other response than 204
            ValueError: An invalid value was provided for ``desired_state``

        """

        if desired_state not in self._STATES:
            raise ValueError('state must be one of: {0}'.format(
                self._STATES
            ))

        name = self._unit_name(unit)

        self._single_request('PUT', self._url('units', name), body={
            'desiredState': desired_state
        }, expected=(204,), errors={400: BadParameters})

        logger.info('set desired state of unit %s to %s', name, desired_state)

        return True

    def destroy_unit(self, unit):
        """Delete a unit from the cluster

        Args:
            unit (str, Unit): The Unit, or name of the unit to delete

        Returns:
            True: The unit was deleted

        Raises:
            clusterclient.errors.NotFound: The unit does not exist
            clusterclient.errors.RemoteError: Any other response than 204

        """

        name = self._unit_name(unit)

        self._single_request('DELETE', self._url('units', name), expected=(204,), errors={404: NotFound})

        logger.info('destroyed unit %s', name)

        return True

    def list_units(self):
        """Return the current list of the Units in the fleet cluster

        Returns:
            list of Unit: Every unit, in the order fleet enumerated them

        Raises:
            clusterclient.errors.ClusterClientError: Any page could not be fetched or decoded

        """
        return self._paginator('units', self._make_unit).fetch_all(self._url('units'))

    def get_unit(self, name):
        """Retreive a specific unit from the fleet cluster by name

        Args:
            name (str): The name of the unit

        Returns:
            Unit: The unit identified by ``name`` in the fleet cluster

        Raises:
            clusterclient.errors.NotFound: fleet has no unit by that name
            clusterclient.errors.RemoteError: Any other response than 200
            clusterclient.errors.DecodeError: The response was not a unit

        """
        (_, content) = self._single_request('GET', self._url('units', name), errors={404: NotFound})

        return decode_object(content, self._make_unit)

    def list_units_by_name(self, name):
        """Find the template and instances of the templated unit ``name``

        Args:
            name (str): The base name, e.g. 'web' for 'web@.service' and 'web@1.service'

        Returns:
            two item tuple: (template, instances). template is None if fleet has none,
                            instances is a list of Unit, empty if there are none.

        """
        return correlate(self.list_units(), name)

    def list_unit_states(self, machine_id=None, unit_name=None):
        """Return the current UnitState for the fleet cluster

        Args:
            machine_id (str): filter all UnitState objects to those
                              originating from a specific machine

            unit_name (str):  filter all UnitState objects to those related
                              to a specific unit

        Returns:
            list of UnitState: Every matching state, in the order fleet enumerated them

        Raises:
            clusterclient.errors.ClusterClientError: Any page could not be fetched or decoded

        """
        return self._paginator('states', self._make_state).fetch_all(
            self._url('state'),
            params={'machineID': machine_id, 'unitName': unit_name}
        )

    def list_unit_states_by_name(self, name):
        """Return the states of every instance of the templated unit ``name``"""
        return filter_by_base_name(self.list_unit_states(), name)

    def get_unit_states_by_machine_id(self, machine_id):
        return self.list_unit_states(machine_id=machine_id)

    def get_unit_states_by_unit_name(self, unit_name):
        return self.list_unit_states(unit_name=unit_name)

    def list_machines(self):
        """Retrieve a list of machines in the fleet cluster

        Returns:
            list of Machine: Every machine in the cluster

        Raises:
            clusterclient.errors.ClusterClientError: Any page could not be fetched or decoded

        """
        return self._paginator('machines', self._make_machine).fetch_all(self._url('machines'))

    def get_cluster_snapshot(self, concurrent=False):
        """Read every unit, unit state and machine in the cluster

        The three listings are independent requests, the result is not a consistent point in time view.

        Args:
            concurrent (bool): Fetch the three listings in parallel

        Returns:
            ClusterSnapshot: (units, unit_states, machines)

        Raises:
            clusterclient.errors.ClusterClientError: The first listing that failed; no partial snapshot is returned

        """
        return assemble_snapshot(self.list_units, self.list_unit_states, self.list_machines, concurrent=concurrent)
