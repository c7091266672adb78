"""Group units and unit states by the template they were instantiated from

A unit named '<base>@<instance>' belongs to the base name '<base>'; a name containing '@.' (e.g.
'web@.service') is the template itself rather than a running instance.
"""

TEMPLATE_MARKER = '@.'


def _prefix(base_name):
    return '{0}@'.format(base_name)


def filter_by_base_name(records, base_name):
    """Return the records whose name starts with '<base_name>@', in their original order

    Works for anything with a ``name`` attribute, Units and UnitStates alike.
    """
    prefix = _prefix(base_name)

    return [record for record in records if record.name.startswith(prefix)]


def correlate(units, base_name):
    """Split the units belonging to ``base_name`` into its template and its instances

    Args:
        units (iterable of Unit): Every unit to consider, usually all units in the cluster
        base_name (str): The name before the '@', e.g. 'web' for 'web@1.service'

    Returns:
        two item tuple: (template, instances). template is None when no template was found, otherwise
        the last one seen. instances keeps the order of ``units``.
    """
    template = None
    instances = []

    for unit in filter_by_base_name(units, base_name):
        if TEMPLATE_MARKER in unit.name:
            template = unit
        else:
            instances.append(unit)

    return (template, instances)
