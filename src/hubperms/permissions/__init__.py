"""Permission resolution over management links and the enterprise grant graph.

Defines:
- PermissionKind / SellsMode: grant tags and enterprise selling modes
- GrantGraph: grantor/grantee lookups per permission kind
- ManagementIndex: direct user → enterprise management
- PermissionResolver: enterprise visibility, editability and variant override authority
- EntityVisibilityQueries: orders, line items, products, schedules, subscriptions
- open_resolution(): per-request lifetime with a private cache
"""

from ..constants import PermissionKind, SellsMode
from .entities import EntityVisibilityQueries
from .graph import GrantGraph
from .management import ManagementIndex
from .resolution import Resolution, build_resolution, open_resolution
from .resolver import PermissionResolver, ResolutionCache

__all__ = [
    "EntityVisibilityQueries",
    "GrantGraph",
    "ManagementIndex",
    "PermissionKind",
    "PermissionResolver",
    "Resolution",
    "ResolutionCache",
    "SellsMode",
    "build_resolution",
    "open_resolution",
]
