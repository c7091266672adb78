from ..objects import ClusterObject


class Node(ClusterObject):
    """A key or directory in the etcd v2 keyspace

    Attributes:
        key: full path of the node
        value: value of a key, absent for directories
        dir: True for directories
        nodes: children of a directory, only present on directory listings
        createdIndex: etcd index the node was created at
        modifiedIndex: etcd index the node was last modified at
    """

    def is_dir(self):
        return bool(self.get('dir'))

    def children(self):
        """Return the nodes below this one as Node objects, recursively wrapped on access"""
        return [Node(client=self._client, data=child) for child in self.get('nodes') or []]
