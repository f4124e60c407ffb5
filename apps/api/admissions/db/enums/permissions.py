"""Role permission helper sets."""

from admissions.db.enums.auth import Role

# Roles that see every prospect (advisors only see their own)
ROLES_CAN_VIEW_ALL_PROSPECTS = {Role.MANAGER, Role.DIRECTOR}

# Roles that can assign prospects to advisors
ROLES_CAN_ASSIGN = {Role.MANAGER, Role.DIRECTOR}

# Roles that can hard-delete prospects
ROLES_CAN_DELETE_PROSPECTS = {Role.DIRECTOR}

# Roles that can create/update campaigns
ROLES_CAN_MANAGE_CAMPAIGNS = {Role.MANAGER, Role.DIRECTOR}

# Roles that can delete campaigns
ROLES_CAN_DELETE_CAMPAIGNS = {Role.DIRECTOR}

# Roles that can edit or delete any communication (authors can always edit their own)
ROLES_CAN_MANAGE_COMMUNICATIONS = {Role.MANAGER, Role.DIRECTOR}

# Roles that can manage reports and public forms
ROLES_CAN_MANAGE_REPORTS = {Role.MANAGER, Role.DIRECTOR}
ROLES_CAN_MANAGE_FORMS = {Role.MANAGER, Role.DIRECTOR}
