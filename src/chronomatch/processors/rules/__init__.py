"""Rule catalogs for English date/time expressions.

Catalogs are listed in priority order; ``default_interpreters`` returns all
of them.
"""

from typing import Iterable, List

from ...core.error_handler import ConfigurationError
from . import casual, hour, weekdays

CATALOGS = {
    "weekdays": weekdays.INTERPRETERS,
    "hour": hour.INTERPRETERS,
    "casual": casual.INTERPRETERS,
}


def load_interpreters(names: Iterable[str]) -> List:
    """Interpreters of the named catalogs, in the order given."""
    interpreters = []
    for name in names:
        if name not in CATALOGS:
            raise ConfigurationError(
                f"Unknown rule catalog {name!r}, expected one of {sorted(CATALOGS)}"
            )
        interpreters.extend(CATALOGS[name])
    return interpreters


def default_interpreters() -> List:
    return load_interpreters(CATALOGS)


__all__ = ["CATALOGS", "load_interpreters", "default_interpreters"]
