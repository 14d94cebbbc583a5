"""String enums for organizations, memberships and data-source queries."""

from enum import StrEnum


class SSOKind(StrEnum):
    FORM = "form"
    GOOGLE = "google"
    GIT = "git"


class MembershipStatus(StrEnum):
    INVITED = "invited"
    ACTIVE = "active"
    ARCHIVED = "archived"


class DefaultGroup(StrEnum):
    ALL_USERS = "all_users"
    ADMIN = "admin"


class QueryStatus(StrEnum):
    OK = "ok"
    ERROR = "error"


class BaserowOperation(StrEnum):
    LIST_ROWS = "list_rows"
    LIST_FIELDS = "list_fields"
    GET_ROW = "get_row"
    CREATE_ROW = "create_row"
    UPDATE_ROW = "update_row"
    MOVE_ROW = "move_row"
    DELETE_ROW = "delete_row"
