import json


class ClusterObject(object):
    """A base class for representing the records sent to, and returned by, cluster services

    Raises:
        AttributeError: You attempted to write to a read only properly / key, or read a missing one

    This class stores a dict in self._data and provides access to it via keys and properties.

        >>> co = ClusterObject(data={'foo': 'bar'})
        >>> co.foo
        'bar'
        >>> co['foo']
        'bar'

    Once the data is set in the constructor, it cannot be overwritten without using methods to do so.

    >>> co.foo = 'baz'
    AttributeError: ClusterObject.foo can not be modified

    """
    def __init__(self, client=None, data=None):
        """
        Args:
            client (clusterclient.service.ServiceClient, optional): The client that retrieved this object
            data (dict, optional): Initialize this object with a copy of this data

        """

        self._update('_client', client)
        self._update('_data', dict(data) if data else {})

    def _update(self, name, value):
        """Uses the parent object's method to bypass our write protection and update ourselves

        Args:
            name (str): The attribute to set/update
            value: The value to assign to the attribute

        """
        return object.__setattr__(self, name, value)

    # Ensure we can be accessed via property or keys
    def __contains__(self, name):
        return name in self._data

    def __getitem__(self, name):
        return self._data[name]

    def __getattr__(self, name):
        # private names never come from the data, this keeps copy/pickle from recursing
        if name.startswith('_'):
            raise AttributeError(name)

        try:
            return self._data[name]
        except KeyError:
            raise AttributeError('{0} has no attribute {1}'.format(
                self.__class__.__name__,
                name
            ))

    def get(self, name, default=None):
        return self._data.get(name, default)

    # Ensure our properties cannot be written to directly
    def __setitem__(self, name, value):
        return self.__setattr__(name, value)

    def __setattr__(self, name, value):
        raise AttributeError('{0}.{1} can not be modified'.format(
            self.__class__.__name__,
            name
        ))

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented

        return self._data == other._data

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result

        return not result

    __hash__ = None

    def __str__(self):
        return json.dumps(self._data)

    def __repr__(self):
        return '<{0}: {1}>'.format(
            self.__class__.__name__,
            str(self)
        )

    def as_dict(self):
        """Return a copy of the internal data structure backing this object"""
        return dict(self._data)
