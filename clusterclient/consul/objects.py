from ..objects import ClusterObject


class HealthCheck(ClusterObject):
    """The state of one health check on one node, as reported by Consul

    Attributes:
        Node: name of the node the check runs on
        CheckID: unique identifier of the check on that node
        Name: human readable check name
        Status: 'passing', 'warning' or 'critical'
        Notes: free form notes attached to the check
        Output: output of the last check run
        ServiceID: ID of the service instance the check belongs to
        ServiceName: name of the service the check belongs to
        CreateIndex: Raft index the check was created at
        ModifyIndex: Raft index the check was last modified at
    """

    def is_passing(self):
        return self.get('Status') == 'passing'
