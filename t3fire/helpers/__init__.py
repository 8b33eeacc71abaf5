"""Interactive helpers that run after the installers.

Currently holds the Firebase configuration collector, which writes real
project credentials over the placeholders laid down by the installers.
"""

from t3fire.helpers.firebase_config import (
    FirebaseAdminConfig,
    FirebaseClientConfig,
    collect_firebase_config,
    parse_admin_config,
    parse_client_config,
    write_firebase_config,
)

__all__ = [
    "FirebaseAdminConfig",
    "FirebaseClientConfig",
    "collect_firebase_config",
    "parse_admin_config",
    "parse_client_config",
    "write_firebase_config",
]
