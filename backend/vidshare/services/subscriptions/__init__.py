from .dto import ChannelRefOut, SubscriptionOut, ToggleOut
from .service import SubscriptionService

__all__ = ["ChannelRefOut", "SubscriptionOut", "SubscriptionService", "ToggleOut"]
