"""Top-level package for the Mercass storefront backend.

The HTTP surface lives in :mod:`mercass.api`, the store access layer in
:mod:`mercass.database`, uploads in :mod:`mercass.storage` and the
payment provider wrapper in :mod:`mercass.payments`.
"""

__version__ = "1.0.0"
