"""photosearch - photo search agent backend.

Wires a declaratively configured agent to an Unsplash search action and a
pair of administrative resolvers that manage the Unsplash access key.
"""

from photosearch.constants import VERSION

__version__ = VERSION

__all__ = ["__version__"]
