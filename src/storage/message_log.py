"""Append-only log of customer messages"""
from __future__ import annotations

from collections import Counter
from typing import Dict, List

from pydantic import ValidationError

from config import logger
from src.core import CustomerMessage
from src.storage.json_store import JsonStore

MESSAGES_KEY = "customer_messages"

class CustomerMessageLog:
    """Per-tenant message history used to derive interaction counts"""

    def __init__(self, store: JsonStore) -> None:
        self.store = store

    def all(self) -> List[CustomerMessage]:
        """Return every logged message in insertion order, skipping malformed records"""
        messages: List[CustomerMessage] = []
        raw = self.store.load(MESSAGES_KEY, [])
        if not isinstance(raw, list):
            logger.warning(f"Ignoring malformed '{MESSAGES_KEY}' record")
            return messages

        for item in raw:
            try:
                messages.append(CustomerMessage.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping malformed customer message: {e.error_count()} errors")
        return messages

    def append(self, message: CustomerMessage) -> CustomerMessage:
        raw = [m.model_dump(mode="json") for m in self.all()]
        raw.append(message.model_dump(mode="json"))
        self.store.save(MESSAGES_KEY, raw)
        return message

    def for_customer(self, customer_id: str) -> List[CustomerMessage]:
        return [m for m in self.all() if m.customer_id == customer_id]

    def interaction_counts(self) -> Dict[str, int]:
        return dict(Counter(m.customer_id for m in self.all()))

    def latest_by_customer(self) -> Dict[str, CustomerMessage]:
        """Most recent message of each customer (later entries win on equal timestamps)"""
        latest: Dict[str, CustomerMessage] = {}
        for message in self.all():
            current = latest.get(message.customer_id)
            if current is None or message.timestamp >= current.timestamp:
                latest[message.customer_id] = message
        return latest
