"""Enumerations exchanged with the XML API.

Member values are the exact names the service uses on the wire.
"""

from connect_xmlapi.models.fields import WireEnum


class StatusCode(WireEnum):
    """Top-level ``code`` attribute of the ``status`` element."""

    NOT_SET = "notset"
    OK = "ok"
    INVALID = "invalid"
    NO_ACCESS = "no-access"
    NO_DATA = "no-data"
    TOO_MUCH_DATA = "too-much-data"
    INTERNAL_ERROR = "internal-error"


class SubCode(WireEnum):
    """``subcode`` attribute of the ``invalid`` element."""

    NOT_SET = "notset"
    ACCOUNT_EXPIRED = "account-expired"
    DENIED = "denied"
    NO_LOGIN = "no-login"
    NO_QUOTA = "no-quota"
    NOT_AVAILABLE = "not-available"
    NOT_SECURE = "not-secure"
    PENDING_ACTIVATION = "pending-activation"
    PENDING_LICENSE = "pending-license"
    SCO_EXPIRED = "sco-expired"
    SCO_NOT_STARTED = "sco-not-started"
    DUPLICATE = "duplicate"
    ILLEGAL_OPERATION = "illegal-operation"
    NO_SUCH_ITEM = "no-such-item"
    RANGE = "range"
    MISSING = "missing"
    FORMAT = "format"


class ScoType(WireEnum):
    """Kind of a shareable content object."""

    NOT_SET = "notset"
    CONTENT = "content"
    COURSE = "course"
    CURRICULUM = "curriculum"
    FOLDER = "folder"
    LINK = "link"
    MEETING = "meeting"
    SESSION = "session"
    TREE = "tree"


class PermissionId(WireEnum):
    """Permission a principal holds on an ACL object."""

    NONE = "none"
    ADMIN = "admin"
    AUTHOR = "author"
    LEARNER = "learner"
    VIEW = "view"
    VIEW_HIDDEN = "view-hidden"
    PUBLIC_ACCESS = "public-access"
    HOST = "host"
    MINI_HOST = "mini-host"
    REMOVE = "remove"
    PUBLISH = "publish"
    MANAGE = "manage"
    DENIED = "denied"


class SpecialPermissionId(WireEnum):
    """Values accepted for the ``public-access`` pseudo principal."""

    VIEW_HIDDEN = "view-hidden"
    REMOVE = "remove"
    DENIED = "denied"


class PrincipalType(WireEnum):
    """Principal and built-in group types."""

    ADMINS = "admins"
    AUTHORS = "authors"
    COURSE_ADMINS = "course-admins"
    EVENT_ADMINS = "event-admins"
    EVENT_GROUP = "event-group"
    EVERYONE = "everyone"
    EXTERNAL_GROUP = "external-group"
    EXTERNAL_USER = "external-user"
    GROUP = "group"
    GUEST = "guest"
    LEARNERS = "learners"
    LIVE_ADMINS = "live-admins"
    SEMINAR_ADMINS = "seminar-admins"
    USER = "user"
