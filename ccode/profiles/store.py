# -*- coding: utf-8 -*-
"""Reading and writing the local profile store (config.json)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Generic, List, Optional, Tuple, TypeVar

from pydantic import ValidationError

from ..constant import GROUP_DIRECT, GROUP_ROUTER, GROUPS, get_profiles_path
from ..errors import (
    AlreadyExistsError,
    InvalidConfigError,
    MalformedDocumentError,
    NoDefaultSetError,
    NotFoundError,
)
from ..providers.validate import (
    validate_direct_profile,
    validate_router_profile,
)
from ..utils.fs import read_json, write_json_atomic
from .migrate import migrate_raw
from .models import DirectProfile, ProfileStoreData, RouterProfile

logger = logging.getLogger(__name__)

P = TypeVar("P", DirectProfile, RouterProfile)


@dataclass(frozen=True)
class ProfileEntry(Generic[P]):
    name: str
    profile: P
    is_default: bool


def _pick_default(names) -> Optional[str]:
    """Default after the current one is removed: smallest remaining name."""
    return min(names) if names else None


class ProfileCollection(Generic[P]):
    """One named group of profiles (direct or router) plus its default.

    Operations mutate the store's in-memory document only; call
    ``ProfileStore.save`` to persist. A failed operation leaves the
    document untouched.
    """

    def __init__(
        self,
        store: "ProfileStore",
        group: str,
        validator: Callable[[P], None],
    ):
        self._store = store
        self.group = group
        self._validate = validator

    # -- internal ----------------------------------------------------------

    @property
    def _entries(self) -> Dict[str, P]:
        return getattr(self._store.data.groups, self.group)

    @property
    def default_name(self) -> Optional[str]:
        return getattr(self._store.data.defaults, f"{self.group}_name")

    def _set_default_name(self, name: Optional[str]) -> None:
        setattr(self._store.data.defaults, f"{self.group}_name", name)

    # -- queries -----------------------------------------------------------

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def names(self) -> List[str]:
        return sorted(self._entries)

    def get(self, name: str) -> P:
        try:
            return self._entries[name]
        except KeyError:
            raise NotFoundError(name, f"{self.group} profile") from None

    def get_default(self) -> Tuple[str, P]:
        """Return ``(name, profile)`` of the default entry."""
        name = self.default_name
        if not name:
            raise NoDefaultSetError(self.group)
        return name, self.get(name)

    def list(self) -> List[ProfileEntry[P]]:
        """All entries sorted by name, flagged with the default."""
        default = self.default_name
        return [
            ProfileEntry(name, self._entries[name], name == default)
            for name in self.names()
        ]

    # -- mutators ----------------------------------------------------------

    def add(self, name: str, profile: P) -> P:
        if not name or not name.strip():
            raise InvalidConfigError("Profile name must not be empty", "name")
        if name in self._entries:
            raise AlreadyExistsError(name, f"{self.group} profile")
        if isinstance(profile, RouterProfile) and profile.name != name:
            profile = profile.model_copy(update={"name": name})
        self._validate(profile)

        was_empty = not self._entries
        self._entries[name] = profile
        if was_empty:
            self._set_default_name(name)
            logger.debug("%s profile %s promoted to default", self.group, name)
        return profile

    def remove(self, name: str) -> P:
        if name not in self._entries:
            raise NotFoundError(name, f"{self.group} profile")
        profile = self._entries.pop(name)
        if self.default_name == name:
            new_default = _pick_default(self._entries)
            self._set_default_name(new_default)
            logger.debug(
                "Default %s profile reassigned from %s to %s",
                self.group,
                name,
                new_default,
            )
        return profile

    def set_default(self, name: str) -> None:
        if name not in self._entries:
            raise NotFoundError(name, f"{self.group} profile")
        self._set_default_name(name)


class ProfileStore:
    """The local profile store document at a fixed path."""

    def __init__(self, path: Optional[Path] = None):
        self.path = path or get_profiles_path()
        self._data: Optional[ProfileStoreData] = None

    @property
    def data(self) -> ProfileStoreData:
        if self._data is None:
            self.load()
        return self._data

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> ProfileStoreData:
        """(Re)load the document from disk, migrating legacy layouts.

        A missing file yields an empty document in the current layout.
        """
        raw = read_json(self.path)
        if raw is None:
            data = ProfileStoreData()
        else:
            try:
                data = migrate_raw(raw)
            except ValidationError as exc:
                raise MalformedDocumentError(self.path, exc) from exc
        _repair_defaults(data)
        self._data = data
        return data

    def save(self) -> None:
        """Write the in-memory document, pretty-printed."""
        write_json_atomic(self.path, self.data.to_document())
        logger.debug("Profile store saved: %s", self.path)

    @property
    def direct(self) -> ProfileCollection[DirectProfile]:
        return ProfileCollection(self, GROUP_DIRECT, validate_direct_profile)

    @property
    def router(self) -> ProfileCollection[RouterProfile]:
        return ProfileCollection(self, GROUP_ROUTER, validate_router_profile)

    def collection(self, group: str) -> ProfileCollection:
        if group == GROUP_DIRECT:
            return self.direct
        if group == GROUP_ROUTER:
            return self.router
        raise InvalidConfigError(
            f"Unknown group '{group}', expected one of: {', '.join(GROUPS)}",
            "group",
        )

    @property
    def default_group(self) -> str:
        return self.data.default_group or GROUP_DIRECT

    @default_group.setter
    def default_group(self, group: str) -> None:
        if group not in GROUPS:
            raise InvalidConfigError(
                f"Unknown group '{group}', expected one of: "
                f"{', '.join(GROUPS)}",
                "default_group",
            )
        self.data.default_group = group


def _repair_defaults(data: ProfileStoreData) -> None:
    """Re-point default selections that name a missing profile."""
    for group in GROUPS:
        entries = getattr(data.groups, group)
        attr = f"{group}_name"
        current = getattr(data.defaults, attr)
        if current is not None and current not in entries:
            replacement = _pick_default(entries)
            logger.warning(
                "Default %s profile '%s' does not exist, using %s",
                group,
                current,
                replacement,
            )
            setattr(data.defaults, attr, replacement)
