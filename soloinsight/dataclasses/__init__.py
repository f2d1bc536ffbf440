"""
dataclasses package
-------------------
Record types for Solo Insight user data.

- Entry / EntryDraft / LinkedContent: logged sessions
- ContentItem: library references
- AiAccessState: passphrase gate state
- Snapshot: all user data for the active session
"""
from soloinsight.dataclasses.access_state import AiAccessState
from soloinsight.dataclasses.content_item import ContentItem
from soloinsight.dataclasses.entry import Entry, EntryDraft, LinkedContent
from soloinsight.dataclasses.snapshot import Snapshot

__all__ = [
    "AiAccessState",
    "ContentItem",
    "Entry",
    "EntryDraft",
    "LinkedContent",
    "Snapshot",
]
