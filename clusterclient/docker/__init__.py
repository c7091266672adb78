from .client import DockerClient  # NOQA
from .objects import Container, Image  # NOQA
