import contextlib
import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from ..utils.logs import new_console_logger
from .codec import decode, encode
from .errors import IOFailure, InvalidArgument, NotFound
from .locks import LockRegistry
from .paths import EXTENSION, collection_dir, record_path, require_names, resolve_record, temp_path


@dataclass
class Options:
    logger: Optional[logging.Logger] = None


class JsonStore:
    """JSON-on-disk collections: one directory per collection, one file per record.

    Writes and deletes on a collection are serialized by that collection's lock
    and published with an atomic rename. Reads and scans take no lock; they see
    either the previous or the new version of a record, never a partial one.
    """

    def __init__(self, data_dir, options: Optional[Options] = None):
        opts = options or Options()
        self.log = opts.logger or new_console_logger()
        self.data_dir = Path(os.path.normpath(data_dir))
        self._locks = LockRegistry()

        if self.data_dir.exists():
            self.log.debug("Using %s (database already exists)", self.data_dir)
            return

        self.log.debug("Creating the database at %s ...", self.data_dir)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise IOFailure(f"unable to create database at {self.data_dir}: {exc}") from exc

    def write(self, collection: str, resource: str, value: Any):
        require_names(collection, resource)

        with self._locks.acquire(collection):
            directory = collection_dir(self.data_dir, collection)
            final = record_path(self.data_dir, collection, resource)
            tmp = temp_path(final)

            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise IOFailure(f"unable to create collection {collection}: {exc}") from exc

            data = encode(value)

            try:
                tmp.write_bytes(data)
                os.replace(tmp, final)
            except OSError as exc:
                with contextlib.suppress(OSError):
                    tmp.unlink()
                raise IOFailure(f"unable to write {collection}/{resource}: {exc}") from exc

        self.log.debug("Successfully wrote %s/%s", collection, resource)

    def read(self, collection: str, resource: str, into: Optional[type] = None) -> Any:
        """Load one record, decoded into ``into`` when given (see codec.decode)."""
        require_names(collection, resource)

        path = resolve_record(self.data_dir, collection, resource)
        if path is None:
            raise NotFound(f"unable to find record {collection}/{resource}")

        try:
            data = path.read_bytes()
        except FileNotFoundError as exc:
            raise NotFound(f"unable to find record {collection}/{resource}") from exc
        except OSError as exc:
            raise IOFailure(f"unable to read {collection}/{resource}: {exc}") from exc

        return decode(data, into)

    def read_all(self, collection: str) -> List[bytes]:
        """Raw contents of every record in ``collection``, in directory order."""
        if not collection:
            raise InvalidArgument("missing collection - unable to read")

        directory = collection_dir(self.data_dir, collection)
        if not directory.is_dir():
            raise NotFound(f"unable to find collection {collection}")

        records = []
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    if not entry.name.endswith(EXTENSION) or not entry.is_file():
                        continue
                    try:
                        with open(entry.path, "rb") as f:
                            records.append(f.read())
                    except FileNotFoundError:
                        # deleted after listing
                        continue
        except FileNotFoundError as exc:
            raise NotFound(f"unable to find collection {collection}") from exc
        except OSError as exc:
            raise IOFailure(f"unable to read collection {collection}: {exc}") from exc

        self.log.debug("Successfully read all records from %s", collection)
        return records

    def resources(self, collection: str) -> List[str]:
        """Sorted names of the records stored in ``collection``."""
        if not collection:
            raise InvalidArgument("missing collection - unable to read")

        directory = collection_dir(self.data_dir, collection)
        if not directory.is_dir():
            raise NotFound(f"unable to find collection {collection}")

        try:
            return sorted(
                p.name[: -len(EXTENSION)]
                for p in directory.iterdir()
                if p.name.endswith(EXTENSION) and p.is_file()
            )
        except OSError as exc:
            raise IOFailure(f"unable to list collection {collection}: {exc}") from exc

    def delete(self, collection: str, resource: str = ""):
        """Remove one record, or the whole collection when ``resource`` is empty."""
        if not collection:
            raise InvalidArgument("missing collection - nothing to delete")

        name = f"{collection}/{resource}" if resource else collection
        with self._locks.acquire(collection):
            target = collection_dir(self.data_dir, collection)
            if resource:
                target = target / resource

            try:
                if target.is_dir():
                    shutil.rmtree(target)
                else:
                    record = resolve_record(self.data_dir, collection, resource) if resource else None
                    if record is None:
                        raise NotFound(f"unable to find file or directory named {name}")
                    record.unlink()
                    with contextlib.suppress(FileNotFoundError):
                        temp_path(record).unlink()
            except OSError as exc:
                raise IOFailure(f"unable to delete {name}: {exc}") from exc

        self.log.debug("Deleted %s", name)


def open_store(data_dir, options: Optional[Options] = None) -> JsonStore:
    return JsonStore(data_dir, options)
