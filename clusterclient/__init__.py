import logging

from .config import ClientConfig, DEFAULT_MAX_PAGES  # NOQA
from .errors import *  # NOQA
from .fleet import FleetClient  # NOQA
from .consul import ConsulClient  # NOQA
from .docker import DockerClient  # NOQA
from .etcd import EtcdClient  # NOQA

__version__ = '0.2.0'

logging.getLogger(__name__).addHandler(logging.NullHandler())
