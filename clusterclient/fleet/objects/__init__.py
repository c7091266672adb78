from ...objects import ClusterObject  # NOQA
from .unit import Unit, STATES  # NOQA
from .unit_state import UnitState  # NOQA
from .machine import Machine  # NOQA
