from ..objects import ClusterObject


class Container(ClusterObject):
    """A container as listed by the Docker engine's /containers/json endpoint

    Attributes:
        Id, Names, Image, ImageID, Command, Created, Status, Ports, Labels, SizeRw, SizeRootFs,
        HostConfig, NetworkSettings: as documented by the Docker engine API
    """

    @property
    def name(self):
        """The container's primary name without the leading '/'"""
        names = self.get('Names') or []
        if not names:
            return None

        return names[0].lstrip('/')


class Image(ClusterObject):
    """An image as listed by the Docker engine's /images/json endpoint

    Attributes:
        Id, RepoTags, RepoDigests, Created, Size, VirtualSize, Labels
    """
    pass
