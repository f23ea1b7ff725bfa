"""
Environment resolution — pick the recipe for this machine.

First match wins, across both dimensions: sources are scanned in the
order the caller gives (the user's repository order), and within each
package, environments in declaration order.  A later duplicate is
shadowed silently; that is the contract, not an error.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from mopm.core.errors import NotFoundError
from mopm.core.models.package import Environment, PackageFile

logger = logging.getLogger(__name__)


def resolve(machine_id: str, sources: Sequence[PackageFile]) -> Environment:
    """Return the first environment whose id equals ``machine_id``.

    Raises:
        NotFoundError: No source declares an environment for this machine.
    """
    for source in sources:
        env = source.package.get_environment(machine_id)
        if env is not None:
            logger.info("Matched %s in %s", machine_id, source.path)
            return env
        logger.debug("No %s environment in %s", machine_id, source.path)

    raise NotFoundError(f"Matched environment does not exist for {machine_id}")
