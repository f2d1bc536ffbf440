#!/usr/bin/env python3
"""
session.py
----------
Authenticated user session.

A UserSession exists from a successful login until logout. It scopes all
remote reads and writes to one user id and owns the standing document
subscription, so closing the session is what stops remote pushes from
reaching the facade.
"""
from __future__ import annotations

from typing import Optional

from soloinsight.core.logging_manager import InsightLogger, safe_logger
from .configs.storage_configs import DEFAULT_LANGUAGE
from .document_store import SQLDocumentStore, Subscription


class UserSession:
    """
    Session context for one authenticated user.

    Attributes:
        uid: Authenticated user id
        store: Remote document store of this user
        language: Language preference from the user's document
        subscription: Standing document subscription (once attached)
    """

    def __init__(
        self,
        uid: str,
        store: SQLDocumentStore,
        language: str = DEFAULT_LANGUAGE,
        logger: Optional[InsightLogger] = None,
    ) -> None:
        self.uid = uid
        self.store = store
        self.language = language
        self.logger = logger
        self.subscription: Optional[Subscription] = None
        self.closed = False

    @property
    def active(self) -> bool:
        return not self.closed

    def attach(self, subscription: Subscription) -> None:
        """Take ownership of the user's document subscription."""
        if self.subscription is not None:
            self.subscription.cancel()
        self.subscription = subscription

    def close(self) -> None:
        """Cancel the subscription. Safe to call more than once."""
        if self.closed:
            return
        if self.subscription is not None:
            self.subscription.cancel()
            self.subscription = None
        self.closed = True
        safe_logger(self.logger).log_info("User session closed", {"uid": self.uid})

    def __repr__(self) -> str:
        state = "closed" if self.closed else "active"
        return f"<UserSession {self.uid} {state}>"
