from .client import EtcdClient  # NOQA
from .objects import Node  # NOQA
