"""Binding environment: the names a session has assigned and their last values."""

import logging

logger = logging.getLogger(__name__)


class Environment(dict):
    """Mapping of name: Complex. Last write wins; reading a name never binds it.

    An Environment is not synchronized. Each Session owns its own, and hosts evaluating lines concurrently must either
    keep one per session or serialize access to a shared one.
    """

    def bind(self, name, value):
        """Binds value to name, overwriting any previous value, and returns value."""
        logger.debug("bind %s = %s", name, value)
        self[name] = value
        return value

    def lookup(self, name):
        """Returns the value bound to name, or None if name is unbound."""
        return self.get(name)

    def names(self):
        """Bound names in sorted order."""
        return sorted(self)
