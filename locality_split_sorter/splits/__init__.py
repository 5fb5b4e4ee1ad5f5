from .base import (
    Path,
    AuthorityKey,
    SimpleSplit,
    CombinedSplit,
    Split,
    split_from_dict,
    split_to_dict,
)

__all__ = [
    'Path',
    'AuthorityKey',
    'SimpleSplit',
    'CombinedSplit',
    'Split',
    'split_from_dict',
    'split_to_dict',
]
