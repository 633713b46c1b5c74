"""Teams Notifier - Microsoft Teams Adaptive Card notifications for CI pipelines."""

__version__ = "0.1.0"

from teams_notifier.context import Context
from teams_notifier.config import PluginSettings
from teams_notifier.models import Message, AdaptiveCard, FactName, ButtonName
from teams_notifier.avatar import AvatarFetchError, fetch_avatar_data_uri
from teams_notifier.card import CardBuilder, resolve_version, status_style
from teams_notifier.delivery import DeliveryResult, send_card

__all__ = [
    "Context",
    "PluginSettings",
    "Message",
    "AdaptiveCard",
    "FactName",
    "ButtonName",
    "AvatarFetchError",
    "fetch_avatar_data_uri",
    "CardBuilder",
    "resolve_version",
    "status_style",
    "DeliveryResult",
    "send_card",
]
