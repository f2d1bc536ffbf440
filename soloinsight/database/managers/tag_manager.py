#!/usr/bin/env python3
"""
tag_manager.py
--------------------
Manages the user's tag list.

The list starts from the default tags, grows with custom tags and is
never pruned (deleting entries leaves their tags in place).

Usage:
    tag_mgr = TagManager(context, logger)
    tag_mgr.add("Morning")
    tag_mgr.list()
"""
from typing import List, Sequence

from soloinsight.core.exceptions import ValidationError
from soloinsight.core.validators import DataValidator
from soloinsight.database.configs.storage_configs import TAGS
from soloinsight.database.decorators import log_database_operation
from .base_manager import BaseManager


class TagManager(BaseManager):
    """Tag list operations."""

    def list(self) -> List[str]:
        return list(self.snapshot.tags)

    def exists(self, tag: str) -> bool:
        return tag in self.snapshot.tags

    @log_database_operation("add_tag")
    def add(self, tag: str) -> List[str]:
        """
        Append a custom tag.

        Args:
            tag: Tag name (surrounding whitespace stripped)

        Returns:
            The tag list after the operation

        Raises:
            ValidationError: If the tag is empty
        """
        name = DataValidator.normalize_string(tag)
        if not name:
            raise ValidationError("Tag cannot be empty")

        if name not in self.snapshot.tags:
            self.snapshot.tags = [*self.snapshot.tags, name]
            self._persist(TAGS)
        return self.list()

    def replace_all(self, tags: Sequence[str], persist: bool = True) -> None:
        self.snapshot.tags = list(tags)
        if persist:
            self._persist(TAGS)
