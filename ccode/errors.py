# -*- coding: utf-8 -*-
"""Exception types raised by the profile store and router config engine."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class CcodeError(Exception):
    """Base class for every error this package raises on purpose."""


class NotFoundError(CcodeError, LookupError):
    """A lookup, removal or default selection targeted an absent entry."""

    def __init__(self, name: str, kind: str = "profile", hint: str = ""):
        self.name = name
        self.kind = kind
        self.hint = hint
        message = f"{kind.capitalize()} '{name}' does not exist"
        if hint:
            message = f"{message}; {hint}"
        super().__init__(message)


class AlreadyExistsError(CcodeError):
    """An add targeted a name that is already taken."""

    def __init__(self, name: str, kind: str = "profile"):
        self.name = name
        self.kind = kind
        super().__init__(f"{kind.capitalize()} '{name}' already exists")


class NoDefaultSetError(CcodeError):
    """A default was requested but none has been configured."""

    def __init__(self, group: str):
        self.group = group
        super().__init__(f"No default {group} profile is set")


class InvalidConfigError(CcodeError, ValueError):
    """A validation rule failed; ``field`` names the offending field."""

    def __init__(self, reason: str, field: Optional[str] = None):
        self.reason = reason
        self.field = field
        super().__init__(reason)


class NothingToBackupError(CcodeError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Nothing to back up: {path} does not exist")


class IOFailureError(CcodeError):
    """Reading or writing a document failed at the OS level."""

    def __init__(self, path: Path, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"I/O error on {path}: {cause}")


class MalformedDocumentError(CcodeError):
    """A document exists but is not valid JSON or not the expected shape."""

    def __init__(self, path: Path, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"Malformed document {path}: {cause}")
