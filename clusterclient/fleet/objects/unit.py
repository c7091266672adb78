import io

from ...objects import ClusterObject

STATES = ['inactive', 'loaded', 'launched']


class Unit(ClusterObject):
    """This object represents a Unit in Fleet

    Create and modify Unit entities to communicate to fleet the desired state of the cluster.
    This simply declares what should be happening; the backend system still has to react to the changes in
    this desired state. The actual state of the system is communicated with UnitState entities.

    Attributes (all are readonly):
        Always available:
            options (update with add_option, remove_option): list of UnitOption dicts
            desiredState: (update with set_desired_state): state the user wishes the Unit to be in
                          ("inactive", "loaded", or "launched")

        Available once units are submitted to fleet:
            name: unique identifier of entity
            currentState: state the Unit is currently in (same possible values as desiredState)

    A UnitOption represents a single option in a systemd unit file.
        section: name of section that contains the option (e.g. "Unit", "Service", "Socket")
        name: name of option (e.g. "BindsTo", "After", "ExecStart")
        value: value of option (e.g. "/usr/bin/docker run busybox /bin/sleep 1000")

    Units named '<base>@<instance>' are instances of the template named '<base>@.<suffix>'.

    """

    _STATES = STATES

    def __init__(self, client=None, data=None, desired_state=None, options=None, from_file=None, from_string=None):
        """Create a new unit

        Args:
            client (clusterclient.fleet.FleetClient, optional): The fleet client that retrieved this object
            data (dict, optional): Initialize this object with this data.  If this is used you must not
                                   specify options, desired_state, from_file, or from_string

            desired_state (string, optional): The desired_state for this object, defaults to 'launched' if not specified

            If you do not specify data, You may specify one of the following args to initialize the object:

                options (list, optional): A list of options to initialize the object with.
                from_file (str, optional): Initialize this object from the unit file on disk at this path
                from_string (str, optional): Initialize this object from the unit file in this string

                If none are specified, an empty unit will be created

        Raises:
            IOError: from_file was specified and it does not exist
            ValueError: Conflicting options, or The unit contents specified in from_string or from_file is not valid

        """

        # make sure if they specify data, then they didn't specify anything else
        if data and (desired_state or options or from_file or from_string):
            raise ValueError('If you specify data you can not specify desired_state,'
                             'options, from_file, or from_string')

        # count how many of options, from_file, from_string we have, only one is allowed
        given = len([thing for thing in (options, from_file, from_string) if thing])
        if given > 1:
            raise ValueError('You must specify only one of options, from_file, from_string')

        if desired_state is not None and desired_state not in self._STATES:
            raise ValueError('desired_state must be one of: {0}'.format(self._STATES))

        if data is None:
            # Minimum structure required by fleet
            data = {
                'desiredState': desired_state or 'launched',
                'options': [dict(option) for option in options or []]
            }

        # Call the parent class to configure us
        super(Unit, self).__init__(client=client, data=data)

        # If they asked us to load from a file, attempt to slurp it up
        if from_file:
            with open(from_file, 'r') as fh:
                self._set_options_from_file(fh)

        # If they asked us to load from a string, hand the loader a StringIO
        if from_string:
            self._set_options_from_file(io.StringIO(from_string))

    def __repr__(self):
        return '<{0}: {1}>'.format(
            self.__class__.__name__,
            self.as_dict()
        )

    def __str__(self):
        """Generate a Unit file representation of this object"""

        # get a list of sections, in the order they first appear
        sections = []
        for option in self._data.get('options', []):
            if option['section'] not in sections:
                sections.append(option['section'])

        # build our output here
        output = []
        for section in sections:
            output.append(u'[{0}]'.format(section))

            for option in self._data['options']:
                if option['section'] == section:
                    output.append(u'{0}={1}'.format(option['name'], option['value']))

        # join and return the output
        return u"\n".join(output)

    def _logical_lines(self, file_handle):
        """Yield (line_number, line) for each line of a unit file, joining '\\' continuations"""
        pending = None

        for line_number, raw in enumerate(file_handle.read().splitlines(), 1):
            if pending is not None:
                (start, line) = (pending[0], pending[1] + raw)
            else:
                (start, line) = (line_number, raw.strip())

            if line.endswith('\\'):
                pending = (start, line[:-1])
                continue

            pending = None
            yield (start, line.strip())

        if pending is not None:
            yield (pending[0], pending[1].strip())

    def _set_options_from_file(self, file_handle):
        """Parses a unit file and updates self._data['options']

        Args:
            file_handle (file): a file-like object (supporting read()) containing a unit

        Returns:
            True: The file was successfuly parsed and options were updated

        Raises:
            ValueError: The unit contents are not valid
        """

        # Can't use configparser, it doesn't handle multiple entries for the same key in the same section
        # build our output here
        options = []

        # the section we are currently in
        section = None
        for (line_number, line) in self._logical_lines(file_handle):
            # ignore comments, and blank lines
            if not line or line.startswith('#') or line.startswith(';'):
                continue

            # Section headers look like: [Section]
            if line.startswith('[') and line.endswith(']'):
                section = line.strip('[]')
                continue

            # We encountered a non blank line outside of a section, this is a problem
            if not section:
                raise ValueError(
                    'Unable to parse unit file; '
                    'Unexpected line outside of a section: {0} (line: {1})'.format(
                        line,
                        line_number
                    ))

            # Attempt to parse a line inside a section
            # Lines should look like: name=value
            try:
                name, value = line.split('=', 1)
            except ValueError:
                raise ValueError(
                    'Unable to parse unit file; '
                    'Malformed line in section {0}: {1} (line: {2})'.format(
                        section,
                        line,
                        line_number
                    ))

            options.append({
                'section': section,
                'name': name.strip(),
                'value': value.strip()
            })

        # update our internal structure
        self._data['options'] = options

        return True

    def _is_live(self):
        """Checks to see if this unit came from fleet, or was created locally

        Only units with a .name property (set by the server), and _client property are considered 'live'

        """
        return bool('name' in self._data and self._client)

    @property
    def base_name(self):
        """The part of the name before '@', or None for units that aren't templates or instances"""
        name = self._data.get('name', '')
        if '@' not in name:
            return None

        return name.split('@', 1)[0]

    @property
    def instance(self):
        """The part of an instance name between '@' and the unit type suffix, e.g. '1' for 'web@1.service'"""
        name = self._data.get('name', '')
        if '@' not in name or self.is_template():
            return None

        return name.split('@', 1)[1].rsplit('.', 1)[0]

    def is_template(self):
        return '@.' in self._data.get('name', '')

    def add_option(self, section, name, value):
        """Add an option to a section of the unit file

        Args:
            section (str): The name of the section, If it doesn't exist it will be created
            name (str): The name of the option to add
            value (str): The value of the option

        Returns:
            True: The item was added

        Raises:
            RuntimeError: The unit was already submitted to fleet
        """

        # Don't allow updating units we loaded from fleet, it's not supported
        if self._is_live():
            raise RuntimeError('Submitted units cannot update their options')

        self._data['options'].append({
            'section': section,
            'name': name,
            'value': value
        })

        return True

    def remove_option(self, section, name, value=None):
        """Remove an option from a unit

        Args:
            section (str): The section to remove from.
            name (str): The item to remove.
            value (str, optional): If specified, only the option matching this value will be removed
                                   If not specified, all options with ``name`` in ``section`` will be removed

        Returns:
            True: At least one item was removed
            False: The item requested to remove was not found

        Raises:
            RuntimeError: The unit was already submitted to fleet
        """
        # Don't allow updating units we loaded from fleet, it's not supported
        if self._is_live():
            raise RuntimeError('Submitted units cannot update their options')

        # keep every option that doesn't match section, name and (if given) value
        kept = [
            option for option in self._data['options']
            if not (
                option['section'] == section and
                option['name'] == name and
                (value is None or option['value'] == value)
            )
        ]

        removed = len(self._data['options']) - len(kept)
        self._data['options'] = kept

        return removed > 0

    def destroy(self):
        """Remove a unit from the fleet cluster

        Returns:
            True: The unit was removed

        Raises:
            clusterclient.errors.RemoteError: Fleet refused to destroy the unit
            RuntimeError: The unit was never submitted to fleet

        """

        # if this unit didn't come from fleet, we can't destroy it
        if not self._is_live():
            raise RuntimeError('A unit must be submitted to fleet before it can destroyed.')

        return self._client.destroy_unit(self.name)

    def set_desired_state(self, state):
        """Update the desired state of a unit.

        Live units are updated on the server and then refreshed from it.

        Args:
            state (str): The desired state for the unit, must be one of ``_STATES``

        Returns:
            str: The updated state

        Raises:
            clusterclient.errors.RemoteError: Fleet refused the update
            ValueError: An invalid value for ``state`` was provided
        """
        if state not in self._STATES:
            raise ValueError(
                'state must be one of: {0}'.format(
                    self._STATES
                ))

        # if we have a name, then we came from the server
        # and we have a handle to an active client
        # Then update ourselves on the server first, and only take what it reports back
        if self._is_live():
            self._client.set_unit_desired_state(self.name, state)
            self._update('_data', self._client.get_unit(self.name).as_dict())
        else:
            self._data['desiredState'] = state

        # Return the state
        return self._data['desiredState']
