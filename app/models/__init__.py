from app.models.analytics import AnalyticsEvent, AnalyticsEventType
from app.models.checklist import ItemStatus, UserChecklist, UserItem, UserSection
from app.models.content import FAQ, PublicDoc
from app.models.notification import Notification, NotificationType
from app.models.template import RoleTemplate, TemplateItem, TemplateSection
from app.models.token import EmailVerificationToken, PasswordResetToken
from app.models.user import ROLE_NAMES, Role, User, UserStatus

__all__ = [
    "AnalyticsEvent",
    "AnalyticsEventType",
    "EmailVerificationToken",
    "FAQ",
    "ItemStatus",
    "Notification",
    "NotificationType",
    "PasswordResetToken",
    "PublicDoc",
    "ROLE_NAMES",
    "Role",
    "RoleTemplate",
    "TemplateItem",
    "TemplateSection",
    "User",
    "UserChecklist",
    "UserItem",
    "UserSection",
    "UserStatus",
]
