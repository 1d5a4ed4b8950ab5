"""
Access policy engine.

Four kinds of decisions live here and nowhere else:

1. Role gate      - may this role perform this action on this resource at all?
2. Status gate    - is the identity approved (the admin always is)?
3. Read scoping   - which SQL conditions restrict a list query for this identity?
4. Write checks   - may this identity touch this particular record?

Services call into this module before reading or mutating anything; the
routers only apply the role and status gates through dependencies.
"""
import enum
from typing import Dict, FrozenSet, List, Optional, Tuple

from sqlalchemy.sql.elements import ColumnElement

from app.core.exceptions import AccountNotApprovedError, AuthorizationError, ValidationError
from app.core.logging_config import logger
from app.models.leave_request import LeaveRequest
from app.models.notification import NotificationTarget
from app.models.user import Department, User, UserRole, UserStatus
from app.modules.auth.identity import Identity


class Resource(str, enum.Enum):
    ATTENDANCE = "attendance"
    TIMETABLE = "timetable"
    EXAM = "exam"
    RESULT = "result"
    ASSIGNMENT = "assignment"
    NOTIFICATION = "notification"
    LEAVE_REQUEST = "leave_request"
    USER = "user"


class Action(str, enum.Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    REVIEW = "review"
    MANAGE = "manage"


EVERYONE = frozenset(UserRole)
STAFF = frozenset({UserRole.TEACHER, UserRole.HOD, UserRole.ADMIN})
SUPERVISORS = frozenset({UserRole.HOD, UserRole.ADMIN})
ADMIN_ONLY = frozenset({UserRole.ADMIN})


# Authoritative action -> role matrix. Pairs missing here are denied.
PERMISSIONS: Dict[Tuple[Resource, Action], FrozenSet[UserRole]] = {
    (Resource.ATTENDANCE, Action.CREATE): STAFF,
    (Resource.ATTENDANCE, Action.READ): EVERYONE,

    (Resource.TIMETABLE, Action.CREATE): SUPERVISORS,
    (Resource.TIMETABLE, Action.READ): EVERYONE,
    (Resource.TIMETABLE, Action.DELETE): SUPERVISORS,

    (Resource.EXAM, Action.CREATE): STAFF,
    (Resource.EXAM, Action.READ): EVERYONE,
    (Resource.EXAM, Action.UPDATE): STAFF,
    (Resource.EXAM, Action.DELETE): SUPERVISORS,

    (Resource.RESULT, Action.CREATE): STAFF,
    (Resource.RESULT, Action.READ): EVERYONE,
    (Resource.RESULT, Action.DELETE): SUPERVISORS,

    (Resource.ASSIGNMENT, Action.CREATE): STAFF,
    (Resource.ASSIGNMENT, Action.READ): EVERYONE,
    (Resource.ASSIGNMENT, Action.UPDATE): STAFF,
    (Resource.ASSIGNMENT, Action.DELETE): SUPERVISORS,

    (Resource.NOTIFICATION, Action.CREATE): SUPERVISORS,
    (Resource.NOTIFICATION, Action.READ): EVERYONE,
    (Resource.NOTIFICATION, Action.UPDATE): SUPERVISORS,
    (Resource.NOTIFICATION, Action.DELETE): SUPERVISORS,

    # Ownership for delete and department for review are checked per record
    (Resource.LEAVE_REQUEST, Action.CREATE): EVERYONE,
    (Resource.LEAVE_REQUEST, Action.READ): EVERYONE,
    (Resource.LEAVE_REQUEST, Action.REVIEW): SUPERVISORS,
    (Resource.LEAVE_REQUEST, Action.DELETE): EVERYONE,

    (Resource.USER, Action.READ): EVERYONE,
    (Resource.USER, Action.UPDATE): EVERYONE,
    (Resource.USER, Action.MANAGE): ADMIN_ONLY,
}

# Resources whose records may carry the ALL department wildcard
SHARED_DEPARTMENT_RESOURCES = frozenset({
    Resource.TIMETABLE,
    Resource.EXAM,
    Resource.ASSIGNMENT,
    Resource.NOTIFICATION,
})


def allowed_roles(resource: Resource, action: Action) -> FrozenSet[UserRole]:
    return PERMISSIONS.get((resource, action), frozenset())


def deny(identity: Identity, action: str, message: str, **details) -> AuthorizationError:
    """Log a refusal and build the error for the caller to raise"""
    logger.log_access_denied(
        subject_id=identity.subject_id,
        role=identity.role.value,
        action=action,
        reason=message,
    )
    return AuthorizationError(message, details=details or None)


# ---------------------------------------------------------------------------
# Gates
# ---------------------------------------------------------------------------

def ensure_role(identity: Identity, allowed: FrozenSet[UserRole], action: str = "access") -> None:
    if identity.role not in allowed:
        raise deny(
            identity,
            action,
            "Access denied. Insufficient permissions.",
            requiredRoles=sorted(role.value for role in allowed),
        )


def ensure_permitted(identity: Identity, resource: Resource, action: Action) -> None:
    ensure_role(identity, allowed_roles(resource, action), f"{action.value} {resource.value}")


def ensure_approved(identity: Identity) -> None:
    """Block pending/rejected accounts. The admin identity always passes."""
    if identity.is_admin:
        return
    if identity.status != UserStatus.APPROVED:
        logger.log_access_denied(
            subject_id=identity.subject_id,
            role=identity.role.value,
            action="status gate",
            reason=f"account {identity.status.value}",
        )
        raise AccountNotApprovedError(identity.status.value)


# ---------------------------------------------------------------------------
# Read scoping
# ---------------------------------------------------------------------------

def visible_departments(identity: Identity, include_shared: bool = True) -> Optional[List[Department]]:
    """Departments a non-admin can read; None means unrestricted"""
    if identity.is_admin:
        return None
    if include_shared:
        return [identity.department, Department.ALL]
    return [identity.department]


def department_scope(
    identity: Identity,
    column,
    requested: Optional[Department] = None,
    include_shared: bool = True,
) -> List[ColumnElement]:
    """
    Department conditions for a list query.

    Admin: only the department it asked for, if any. Everyone else: their
    own department (plus the ALL wildcard where the resource has one),
    regardless of what they asked for.
    """
    if identity.is_admin:
        return [column == requested] if requested else []
    return [column.in_(visible_departments(identity, include_shared))]


def owner_scope(
    identity: Identity,
    column,
    requested_owner: Optional[str] = None,
    owner_roles: FrozenSet[UserRole] = frozenset({UserRole.STUDENT}),
) -> List[ColumnElement]:
    """Restrict to the caller's own records when their role only sees its own"""
    if identity.role in owner_roles:
        return [column == identity.subject_id]
    if requested_owner:
        return [column == requested_owner]
    return []


def notification_scope(
    identity: Identity,
    target_column,
    department_column,
    requested_target: Optional[NotificationTarget] = None,
    requested_department: Optional[Department] = None,
) -> List[ColumnElement]:
    """
    Target role AND department must both match, each also accepting ALL.

    Students and teachers always see their own role. HODs and the admin may
    browse another target role. The admin with no filters sees everything.
    """
    conditions: List[ColumnElement] = []

    if identity.role in (UserRole.STUDENT, UserRole.TEACHER):
        target: Optional[NotificationTarget] = NotificationTarget(identity.role.value)
    elif requested_target:
        target = requested_target
    elif identity.is_admin:
        target = None
    else:
        target = NotificationTarget(identity.role.value)

    if target is not None and target != NotificationTarget.ALL:
        conditions.append(target_column.in_([target, NotificationTarget.ALL]))
    elif target == NotificationTarget.ALL:
        conditions.append(target_column == NotificationTarget.ALL)

    if identity.is_admin:
        if requested_department:
            conditions.append(department_column.in_([requested_department, Department.ALL]))
    else:
        conditions.append(department_column.in_([identity.department, Department.ALL]))

    return conditions


def leave_request_scope(identity: Identity) -> List[ColumnElement]:
    """
    Students and teachers list their own requests. An HOD lists the teacher
    requests from their department, which is exactly what they can review;
    the department lives on the requester, so the condition correlates
    against ``users``.
    """
    if identity.is_admin:
        return []
    if identity.role == UserRole.HOD:
        return [
            LeaveRequest.role == UserRole.TEACHER,
            LeaveRequest.requester.has(User.department == identity.department),
        ]
    return [LeaveRequest.requester_id == identity.subject_id]


# ---------------------------------------------------------------------------
# Write checks
# ---------------------------------------------------------------------------

def resolve_write_department(identity: Identity, requested: Optional[Department]) -> Department:
    """
    Department to persist on a create/update.

    The admin may write any department and defaults to ALL. Anyone else
    always writes their own department; explicitly asking for ALL is
    rejected rather than silently narrowed.
    """
    if identity.is_admin:
        return requested or Department.ALL
    if requested == Department.ALL:
        raise ValidationError("Department must be specified for non-admin users", field="department")
    return identity.department


def can_view_department(identity: Identity, department: Department) -> bool:
    return identity.is_admin or department in (identity.department, Department.ALL)


def ensure_can_view(identity: Identity, department: Department, resource: Resource) -> None:
    if not can_view_department(identity, department):
        raise deny(identity, f"read {resource.value}", "Access denied")


def ensure_can_modify(identity: Identity, department: Department, resource: Resource, verb: str = "modify") -> None:
    """Update/delete of a department-scoped record: admin or same department"""
    if identity.is_admin or department == identity.department:
        return
    raise deny(
        identity,
        f"{verb} {resource.value}",
        f"You can only {verb} {resource.value.replace('_', ' ')}s for your department",
    )


def ensure_can_mark_attendance(identity: Identity, target: User) -> None:
    if identity.is_admin or target.department == identity.department:
        return
    raise deny(identity, "create attendance", "You can only mark attendance for users in your department")


def ensure_can_record_result(identity: Identity, student: User, exam_department: Department) -> None:
    """Non-admin staff grade their own department's students on exams they can see"""
    if identity.is_admin:
        return
    if not can_view_department(identity, exam_department):
        raise deny(identity, "create result", "You can only add results for exams in your department")
    if student.department != identity.department:
        raise deny(identity, "create result", "You can only add results for students in your department")


def ensure_can_view_result(identity: Identity, student: User) -> None:
    if identity.is_admin:
        return
    if identity.role == UserRole.STUDENT:
        if student.id != identity.subject_id:
            raise deny(identity, "read result", "Access denied")
        return
    if student.department != identity.department:
        raise deny(identity, "read result", "Access denied")


def ensure_can_view_leave(identity: Identity, leave: LeaveRequest) -> None:
    if identity.is_admin or leave.requester_id == identity.subject_id:
        return
    if (
        identity.role == UserRole.HOD
        and leave.role == UserRole.TEACHER
        and leave.requester.department == identity.department
    ):
        return
    raise deny(identity, "read leave_request", "Access denied")


def ensure_can_review_leave(identity: Identity, leave: LeaveRequest) -> None:
    """Admin reviews anything; an HOD only teacher requests from their department"""
    ensure_permitted(identity, Resource.LEAVE_REQUEST, Action.REVIEW)
    if identity.is_admin:
        return
    if leave.role != UserRole.TEACHER or leave.requester.department != identity.department:
        raise deny(
            identity,
            "review leave_request",
            "You can only review leave requests from teachers in your department",
        )


def ensure_can_delete_leave(identity: Identity, leave: LeaveRequest) -> None:
    if identity.is_admin or leave.requester_id == identity.subject_id:
        return
    raise deny(identity, "delete leave_request", "You can only delete your own leave requests")
