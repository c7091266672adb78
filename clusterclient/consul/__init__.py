from .client import ConsulClient  # NOQA
from .objects import HealthCheck  # NOQA
