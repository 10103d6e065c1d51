"""Sync engine for Kibela notes.

This package orchestrates pull (remote → local files), push (local file →
remote update) and publish (local content → new remote note), and
classifies every failure into an actionable ErrorKind.
"""

from .classifier import classify, classify_graphql_messages
from .engine import SyncEngine
from .errors import ErrorKind, ErrorPayload, InvalidDocumentError, SyncEngineError
from .models import PublishResult, PullResult, RemoteNote, SyncConfig

__all__ = [
    'classify',
    'classify_graphql_messages',
    'SyncEngine',
    'ErrorKind',
    'ErrorPayload',
    'InvalidDocumentError',
    'SyncEngineError',
    'PublishResult',
    'PullResult',
    'RemoteNote',
    'SyncConfig',
]
