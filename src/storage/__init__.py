"""
Storage module
"""

from .json_store import JsonStore
from .message_log import CustomerMessageLog, MESSAGES_KEY

__all__ = [
    "JsonStore",
    "CustomerMessageLog",
    "MESSAGES_KEY",
]
