"""Operations module for high-level MiniGit operations.

This module contains the logic that works on top of the commit graph:
- Diff computation
- Merge reconciliation
- History traversal
"""

from minigit.operations.diff import DiffEngine, FileChange, ChangeType, diff_snapshots
from minigit.operations.merge import MergeEngine, MergeResult, MergeConflict, reconcile
from minigit.operations.log import LogWalker, iter_history, iter_log

__all__ = [
    'DiffEngine', 'FileChange', 'ChangeType', 'diff_snapshots',
    'MergeEngine', 'MergeResult', 'MergeConflict', 'reconcile',
    'LogWalker', 'iter_history', 'iter_log',
]
