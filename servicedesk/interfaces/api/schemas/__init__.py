from .auth import Token
from .event import DomainEventCreate, FailedDeliveryRead, FanOutRead
from .notification import MarkAllReadResponse, NotificationRead, NotificationSummaryRead

__all__ = [
    "Token",
    "DomainEventCreate",
    "FailedDeliveryRead",
    "FanOutRead",
    "MarkAllReadResponse",
    "NotificationRead",
    "NotificationSummaryRead",
]
