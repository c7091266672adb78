from .client import FleetClient  # NOQA
from .correlator import correlate, filter_by_base_name  # NOQA
from .objects import Unit, UnitState, Machine  # NOQA
from .snapshot import ClusterSnapshot  # NOQA
