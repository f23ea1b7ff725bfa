"""
Adapters — mopm's boundary to bash and git.
"""

from mopm.adapters.base import ScriptExecutor, VcsAdapter
from mopm.adapters.mock import MockExecutor
from mopm.adapters.shell.bash import BashExecutor
from mopm.adapters.vcs.git import GitAdapter

__all__ = [
    "BashExecutor",
    "GitAdapter",
    "MockExecutor",
    "ScriptExecutor",
    "VcsAdapter",
]
