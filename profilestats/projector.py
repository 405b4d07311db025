import logging

from .platforms import get_descriptor
from .records import StatRecord

logger = logging.getLogger(__name__)


def project(platform, full_record, requested_features=None):
    """
    Narrow a fetched record down to the caller's selection.

    No selection -> every source field, in source order.
    With a selection -> requested order, keeping only features the platform
    knows about AND the source actually returned. Missing ones are dropped
    silently.
    """
    if requested_features is None:
        return StatRecord(platform, {k: v for k, v in full_record.items() if k != "platform"})

    descriptor = get_descriptor(platform)
    known = set(descriptor.features) if descriptor else set()

    picked = {}
    for feature in requested_features:
        if feature in picked: continue
        if feature not in known:
            logger.debug("Dropping unknown feature %r for %s", feature, platform)
            continue
        if feature in full_record:
            picked[feature] = full_record[feature]

    return StatRecord(platform, picked)
