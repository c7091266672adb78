import unittest

import copy, uuid, json  # NOQA

from ..objects import ClusterObject


class TestClusterObject(unittest.TestCase):
    """Basic tests for the ClusterObject.

    This class isn't used directly, but is the parent class for every record the clients return

    """

    def test_init(self):
        """Test constructor"""
        test_client = object()

        test_data = {
            uuid.uuid4().hex: uuid.uuid4().hex
        }

        co = ClusterObject(client=test_client, data=test_data)

        assert id(co._client) == id(test_client)
        assert co._data == test_data

    def test_data_is_copied(self):
        """Changing the dict used to build the object doesn't change the object"""
        test_data = {'foo': 'bar'}

        co = ClusterObject(data=test_data)
        test_data['foo'] = 'baz'

        assert co.foo == 'bar'

    def test_update(self):
        """_update sets attributes"""
        co = ClusterObject()

        test_key = uuid.uuid4().hex
        test_val = uuid.uuid4().hex

        co._update(test_key, test_val)

        assert getattr(co, test_key) == test_val

    def test_contains_get_item_get_attr(self):
        """__contains__, __getitem__ and __getattr__ read the data"""

        test_key = uuid.uuid4().hex
        test_val = uuid.uuid4().hex

        co = ClusterObject(data={test_key: test_val})

        assert test_key in co
        assert co[test_key] == test_val
        assert getattr(co, test_key) == test_val
        assert co.get(test_key) == test_val
        assert co.get('missing', 'default') == 'default'

    def test_missing(self):
        """Missing keys raise AttributeError or KeyError as appropriate"""
        co = ClusterObject(data={'foo': 'bar'})

        self.assertRaises(AttributeError, lambda: co.missing)
        self.assertRaises(KeyError, lambda: co['missing'])

        assert hasattr(co, 'missing') is False

    def test_setitem_setattr(self):
        """Setting items and attributes is not allowed"""
        co = ClusterObject()

        def test():
            co['foo'] = 'bar'

        def test2():
            setattr(co, 'foo', 'bar')

        self.assertRaises(AttributeError, test)
        self.assertRaises(AttributeError, test2)

    def test_equality(self):
        """Objects of the same type with the same data are equal"""

        class Other(ClusterObject):
            pass

        assert ClusterObject(data={'a': 1}) == ClusterObject(data={'a': 1})
        assert ClusterObject(data={'a': 1}) != ClusterObject(data={'a': 2})
        assert ClusterObject(data={'a': 1}) != Other(data={'a': 1})

    def test_copy(self):
        """Objects survive copy.copy without recursing through __getattr__"""
        co = ClusterObject(data={'a': 1})

        assert copy.copy(co) == co

    def test_str_repr(self):
        """str returns json"""

        test_key = uuid.uuid4().hex
        test_val = uuid.uuid4().hex

        test_data = {
            test_key: test_val
        }

        co = ClusterObject(data=test_data)

        assert test_data == json.loads(str(co))

        assert test_key in repr(co)
        assert test_val in repr(co)

    def test_as_dict(self):
        """as_dict returns a copy of the data"""
        test_data = {'foo': 'bar'}

        co = ClusterObject(data=test_data)
        result = co.as_dict()

        assert test_data == result

        result['foo'] = 'baz'
        assert co.foo == 'bar'
