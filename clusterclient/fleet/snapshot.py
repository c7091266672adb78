import collections
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

logger = logging.getLogger(__name__)

ClusterSnapshot = collections.namedtuple('ClusterSnapshot', ['units', 'unit_states', 'machines'])
ClusterSnapshot.__doc__ = """Units, unit states and machines read by three separate listings

The listings are not taken at the same instant, so nothing ties their contents together; a unit state may
name a unit that was destroyed before the units were listed, and so on.
"""


def assemble_snapshot(list_units, list_unit_states, list_machines, concurrent=False):
    """Run the three listings and combine them

    Any failure aborts the whole snapshot, there is never a partial result.

    Args:
        list_units (callable): Returns every Unit
        list_unit_states (callable): Returns every UnitState
        list_machines (callable): Returns every Machine
        concurrent (bool): Run the listings on a thread pool instead of one after another

    Returns:
        ClusterSnapshot

    Raises:
        clusterclient.errors.ClusterClientError: The first listing to fail
    """
    fetches = (list_units, list_unit_states, list_machines)

    if not concurrent:
        return ClusterSnapshot(*[fetch() for fetch in fetches])

    with ThreadPoolExecutor(max_workers=len(fetches)) as pool:
        futures = [pool.submit(fetch) for fetch in fetches]

        # in completion order, the first listing to fail is the one raised
        for future in as_completed(futures):
            if future.exception() is None:
                continue

            for other in futures:
                other.cancel()

            logger.debug('snapshot aborted: %r', future.exception())
            raise future.exception()

        return ClusterSnapshot(*[future.result() for future in futures])
