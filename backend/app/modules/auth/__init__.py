# Authentication and authorization module

from app.modules.auth.identity import (
    AdminIdentity,
    UserIdentity,
    Identity,
    issue_token,
    resolve_identity,
)
from app.modules.auth.dependencies import (
    get_current_identity,
    get_approved_identity,
    require_permission,
    CurrentIdentity,
    ApprovedIdentity,
    DbSession,
)
