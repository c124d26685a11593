"""
Business logic services
"""
from . import habits
from . import backup

__all__ = [
    'habits',
    'backup'
]
