import logging
import os
from typing import Dict, Mapping, Union

from filedb.codec import DecodeError, EncodeError, Value, decode, encode
from filedb.errors import InvalidDatabaseName, Status
from filedb.ident import is_valid

log = logging.getLogger(__name__)


def del_tree(path: str) -> None:
    """
    Remove a directory and everything below it.

    Only real directories are recursed into. Symlinks (including links to
    directories) and all other entries are unlinked as leaves. Entries that
    cannot be removed are logged and skipped.
    """
    try:
        with os.scandir(path) as it:
            entries = list(it)
    except OSError as e:
        log.warning(f"Could not list {path}: {e}")
        entries = []

    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=False):
                del_tree(entry.path)
            else:
                os.unlink(entry.path)
        except OSError as e:
            log.warning(f"Could not remove {entry.path}: {e}")

    try:
        os.rmdir(path)
    except OSError as e:
        log.warning(f"Could not remove directory {path}: {e}")


class FileDB:
    """
    File system database:
    - The database is a directory; its name is its path.
    - One file per record inside that directory.
    - Each record holds key/value pairs, one per line (see filedb.codec).

    No locking and no atomic writes: callers that share a database across
    processes must serialize access themselves.
    """

    def __init__(self, name: str, base_dir: str = "."):
        if not is_valid(name):
            raise InvalidDatabaseName(name)
        self.name = name
        self.root = os.path.join(base_dir, name)

    def __enter__(self) -> "FileDB":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"FileDB({self.root!r})"

    def _record_path(self, record_name: str) -> str:
        # record_name is an identifier, so it cannot escape the root
        return os.path.join(self.root, record_name)

    # ------------------ public API ------------------ #

    def put(
        self, record_name: str, data: Mapping[str, Value], overwrite: bool = False
    ) -> Status:
        """
        Write a record.

        RECORD_EXISTS and ENCODE_ERROR are detected before anything is
        written, so a failed put never creates or truncates a file.
        """
        if not is_valid(record_name):
            return Status.INVALID_RECORD_NAME

        if not os.path.exists(self.root):
            try:
                os.makedirs(self.root, exist_ok=True)
            except OSError as e:
                log.warning(f"Could not create database root {self.root}: {e}")
                return Status.GENERAL_ERROR
            log.debug(f"Created database root {self.root}")

        path = self._record_path(record_name)
        if not overwrite and os.path.exists(path):
            return Status.RECORD_EXISTS

        try:
            encoded = encode(data)
        except EncodeError as e:
            log.debug(f"Refusing to write {path}: {e}")
            return Status.ENCODE_ERROR

        try:
            with open(path, "wb") as f:
                if encoded:
                    f.write(encoded)
        except OSError as e:
            log.warning(f"Could not write record {path}: {e}")
            return Status.GENERAL_ERROR

        log.debug(f"Wrote record {path} ({len(encoded)} bytes)")
        return Status.OK

    def get(self, record_name: str) -> Union[Dict[str, bytes], Status]:
        """Return the record as a dict, or a Status on failure."""
        if not self.has(record_name):
            return Status.RECORD_NOT_FOUND

        path = self._record_path(record_name)
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError as e:
            log.warning(f"Could not read record {path}: {e}")
            return Status.GENERAL_ERROR

        try:
            return decode(raw)
        except DecodeError as e:
            log.debug(f"Corrupt record {path}: {e}")
            return Status.DECODE_ERROR

    def has(self, record_name: str) -> bool:
        """Whether something exists at the record path. Does not ensure get() works."""
        if not is_valid(record_name):
            return False
        return os.path.lexists(self._record_path(record_name))

    def delete(self, record_name: str) -> Status:
        if not self.has(record_name):
            return Status.RECORD_NOT_FOUND

        path = self._record_path(record_name)
        try:
            os.remove(path)
        except OSError as e:
            log.warning(f"Could not delete record {path}: {e}")
            return Status.GENERAL_ERROR

        log.debug(f"Deleted record {path}")
        return Status.OK

    def destroy(self) -> Status:
        """
        Delete the entire database. Returns OK even if it never existed.

        A root that is not a real directory (a file or a symlink) is not a
        database; it is left in place.
        """
        if os.path.islink(self.root) or (
            os.path.lexists(self.root) and not os.path.isdir(self.root)
        ):
            log.warning(f"Not destroying {self.root}: not a database directory")
        elif os.path.isdir(self.root):
            del_tree(self.root)
            log.debug(f"Destroyed database {self.root}")
        return Status.OK

    def close(self) -> None:
        # nothing is held open between calls; kept for the store interface
        pass
