"""SMS provider senders."""

from .base import SmsSender
from .hubtel import HubtelSender
from .messagenet import MessagenetSender
from .smsbroadcast import SmsBroadcastSender
from .smsglobal import SmsGlobalSender, build_mac_header, sign_request

__all__ = [
    "SmsSender",
    "HubtelSender",
    "MessagenetSender",
    "SmsBroadcastSender",
    "SmsGlobalSender",
    "build_mac_header",
    "sign_request",
]
