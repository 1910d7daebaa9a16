"""Locked reader and writer for the daemon's JSON state file."""

from __future__ import annotations

import copy
import json
import os
from typing import Any, Optional

import portalocker

from cwdaemon.errors import JsonError, OpenFileError, StateAlreadyLockedError, StdErr

_UNEXPECTED_FORMAT = "Unexpected daemon state format"


class JsonLockedState:
    """Exclusive handle on a JSON state file.

    The file is created if missing and locked without blocking, so another
    holder makes construction fail. The JSON is written back on ``close``,
    which also runs when the object is used as a context manager.
    """

    def __init__(self, path: str) -> None:
        path = os.fspath(path)
        fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
        handle = os.fdopen(fd, "r+", encoding="utf-8")
        try:
            portalocker.lock(handle, portalocker.LOCK_EX | portalocker.LOCK_NB)
        except portalocker.exceptions.LockException as exc:
            handle.close()
            raise StateAlreadyLockedError(path) from exc

        try:
            if os.fstat(handle.fileno()).st_size == 0:
                content: Any = {}
            else:
                handle.seek(0)
                try:
                    content = patch_state_if_old(json.load(handle))
                except json.JSONDecodeError as exc:
                    raise JsonError(exc) from exc
        except BaseException:
            portalocker.unlock(handle)
            handle.close()
            raise

        self._file = handle
        self._json: Any = content
        self._path = path
        self._closed = False

    def prepare(self, chain_id: str, deploy_id: str) -> None:
        """Make sure the chain has an entry ready for further writes."""
        if chain_id not in self._json:
            self._json[chain_id] = {deploy_id: {}, "code_ids": {}}

    def state(self) -> Any:
        """Return a copy of the whole JSON state."""
        return copy.deepcopy(self._json)

    def get(self, chain_id: str) -> Optional[Any]:
        """Return the chain's value for reading, or ``None`` if absent."""
        return self._json.get(chain_id)

    def get_mut(self, chain_id: str) -> Any:
        """Return the chain's value for in-place edits; ``KeyError`` if absent."""
        return self._json[chain_id]

    def force_write(self) -> None:
        """Replace the file's contents with the current JSON."""
        self._file.seek(0)
        self._file.truncate(0)
        json.dump(self._json, self._file, indent=2)
        self._file.flush()

    def path(self) -> str:
        """Path of the locked file."""
        return self._path

    def close(self) -> None:
        """Write the state, release the lock and close the file."""
        if self._closed:
            return
        try:
            self.force_write()
        finally:
            self._closed = True
            try:
                portalocker.unlock(self._file)
            finally:
                self._file.close()

    def __enter__(self) -> "JsonLockedState":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"JsonLockedState(path={self._path!r})"


def read(filename: str) -> Any:
    """Read a JSON file without locking it."""
    try:
        handle = open(filename, encoding="utf-8")
    except OSError as exc:
        raise OpenFileError(str(filename), str(exc)) from exc
    with handle:
        try:
            return json.load(handle)
        except json.JSONDecodeError as exc:
            raise JsonError(exc) from exc


def _expect_object(value: Any) -> dict:
    if not isinstance(value, dict):
        raise StdErr(_UNEXPECTED_FORMAT)
    return value


def patch_state_if_old(maybe_old: Any) -> dict:
    """Flatten a state keyed by chain name into one keyed by chain id."""
    state = _expect_object(maybe_old)
    if not state:
        return state
    first_chain = _expect_object(next(iter(state.values())))
    if "code_ids" in first_chain:
        return state

    merged: dict = {}
    for chain_value in state.values():
        merged.update(_expect_object(chain_value))
    return merged