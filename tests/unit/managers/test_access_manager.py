"""
test_access_manager.py
----------------------
Unit tests for the AI access passphrase gate.
"""
import pytest

from soloinsight.core.exceptions import AccessLockedError
from soloinsight.database.managers import PASSPHRASE


class TestAccessManager:
    """Test AccessManager.attempt() and state queries."""

    def test_initial_state(self, access_manager):
        assert not access_manager.is_unlocked()
        assert not access_manager.is_locked()
        assert access_manager.remaining_attempts() == 5

    def test_correct_passphrase_unlocks(self, access_manager, test_db):
        assert access_manager.attempt(PASSPHRASE) is True
        assert access_manager.is_unlocked()
        assert test_db.local_backend.load("aiAccess") == {"unlocked": True, "attempts": 0}

    def test_wrong_passphrase_counts(self, access_manager):
        assert access_manager.attempt("nope") is False
        assert access_manager.state().attempts == 1
        assert access_manager.remaining_attempts() == 4

    def test_locks_after_five_failures(self, access_manager):
        for _ in range(5):
            access_manager.attempt("wrong")
        assert access_manager.is_locked()

        with pytest.raises(AccessLockedError):
            access_manager.attempt(PASSPHRASE)
        assert access_manager.state().attempts == 5

    def test_unlock_on_last_attempt(self, access_manager):
        for _ in range(4):
            access_manager.attempt("wrong")
        assert access_manager.attempt(PASSPHRASE) is True
        assert not access_manager.is_locked()

    def test_already_unlocked_stays_unlocked(self, access_manager):
        access_manager.attempt(PASSPHRASE)
        assert access_manager.attempt("anything") is True
        assert access_manager.state().attempts == 0
