"""Centralized RBAC policies for API resources."""

from dataclasses import dataclass, field

from admissions.db.enums import (
    ROLES_CAN_ASSIGN,
    ROLES_CAN_DELETE_CAMPAIGNS,
    ROLES_CAN_DELETE_PROSPECTS,
    ROLES_CAN_MANAGE_CAMPAIGNS,
    ROLES_CAN_MANAGE_FORMS,
    ROLES_CAN_MANAGE_REPORTS,
    Role,
)

ALL_ROLES = frozenset(Role)


@dataclass(frozen=True)
class ResourcePolicy:
    """Default allowed roles + per-action overrides for a resource."""

    default: frozenset[Role]
    actions: dict[str, frozenset[Role]] = field(default_factory=dict)

    def roles_for(self, action: str | None = None) -> frozenset[Role]:
        if action is None:
            return self.default
        return self.actions.get(action, self.default)


POLICIES: dict[str, ResourcePolicy] = {
    "prospects": ResourcePolicy(
        default=ALL_ROLES,
        actions={
            "assign": frozenset(ROLES_CAN_ASSIGN),
            "delete": frozenset(ROLES_CAN_DELETE_PROSPECTS),
        },
    ),
    "communications": ResourcePolicy(default=ALL_ROLES),
    "campaigns": ResourcePolicy(
        default=frozenset(ROLES_CAN_MANAGE_CAMPAIGNS),
        actions={"delete": frozenset(ROLES_CAN_DELETE_CAMPAIGNS)},
    ),
    "metrics": ResourcePolicy(
        default=ALL_ROLES,
        actions={
            "director": frozenset({Role.DIRECTOR}),
            "manager": frozenset({Role.MANAGER, Role.DIRECTOR}),
            "advisor": ALL_ROLES,
        },
    ),
    "reports": ResourcePolicy(default=frozenset(ROLES_CAN_MANAGE_REPORTS)),
    "forms": ResourcePolicy(default=frozenset(ROLES_CAN_MANAGE_FORMS)),
    "admissions": ResourcePolicy(default=ALL_ROLES),
    "students": ResourcePolicy(default=ALL_ROLES),
}


def get_policy(resource: str) -> ResourcePolicy:
    """Fetch a resource policy or raise KeyError."""
    return POLICIES[resource]
