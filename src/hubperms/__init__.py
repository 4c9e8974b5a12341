from .config import LogLevel, PermissionsConfig, load_config_from_env
from .constants import PermissionKind, SellsMode
from .exceptions import (
    ConfigurationError,
    DataAccessError,
    EmptyEdgePermissionSet,
    HubPermsError,
    InvalidPermissionKind,
    error_registry,
    register_error,
)
from .interfaces import EntityStore
from .logging import (
    ResolutionFormatter,
    ResolutionLoggerAdapter,
    get_resolution_logger,
    preview_ids,
    safe_preview,
    setup_logging,
)
from .memory import InMemoryEntityStore, StoreSnapshot
from .models import (
    Enterprise,
    EnterpriseRelationship,
    LineItem,
    LineItemSupply,
    Order,
    OrderCycle,
    Product,
    Schedule,
    Subscription,
    User,
    Variant,
)
from .permissions import (
    EntityVisibilityQueries,
    GrantGraph,
    ManagementIndex,
    PermissionResolver,
    Resolution,
    ResolutionCache,
    build_resolution,
    open_resolution,
)

__all__ = [
    'LogLevel',
    'PermissionsConfig',
    'load_config_from_env',
    'PermissionKind',
    'SellsMode',
    'HubPermsError',
    'ConfigurationError',
    'DataAccessError',
    'InvalidPermissionKind',
    'EmptyEdgePermissionSet',
    'error_registry',
    'register_error',
    'EntityStore',
    'InMemoryEntityStore',
    'StoreSnapshot',
    'Enterprise',
    'EnterpriseRelationship',
    'LineItem',
    'LineItemSupply',
    'Order',
    'OrderCycle',
    'Product',
    'Schedule',
    'Subscription',
    'User',
    'Variant',
    'GrantGraph',
    'ManagementIndex',
    'PermissionResolver',
    'ResolutionCache',
    'EntityVisibilityQueries',
    'Resolution',
    'build_resolution',
    'open_resolution',
    'safe_preview',
    'preview_ids',
    'ResolutionFormatter',
    'ResolutionLoggerAdapter',
    'setup_logging',
    'get_resolution_logger',
]
