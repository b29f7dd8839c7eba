"""Document store: the whole state lives in one JSON file"""

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from pydantic import ValidationError as PydanticValidationError

from taskdeck.config import DB_PATH
from taskdeck.errors import StorageError
from taskdeck.models.document import Document

logger = logging.getLogger(__name__)


class DocumentStore:
    """
    Reads and rewrites the JSON document wholesale.

    Every mutation is a read-modify-write cycle run inside `transaction()`.
    Cycles are serialized by a process-wide lock, so requests served by one
    process never lose each other's updates. Writers in *different* processes
    are not coordinated: the last one to write wins.

    Writes go to a temporary file that replaces the document atomically, so
    a crash mid-write leaves the previous document in place.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._lock = threading.RLock()

    def _ensure_file(self) -> None:
        """Create the parent directory and an empty document if missing"""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                self._write(Document())
                logger.info(f"Initialized empty document at {self.path}")
        except OSError as e:
            logger.exception(f"Failed to initialize document at {self.path}")
            raise StorageError(f"Cannot initialize {self.path}: {e}") from e

    def load(self) -> Document:
        """Read and validate the document from disk"""
        with self._lock:
            self._ensure_file()
            try:
                raw = self.path.read_text(encoding="utf-8")
                return Document.model_validate(json.loads(raw))
            except OSError as e:
                logger.exception(f"Failed to read {self.path}")
                raise StorageError(f"Cannot read {self.path}: {e}") from e
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.exception(f"Corrupt JSON in {self.path}")
                raise StorageError(f"Corrupt document {self.path}: {e}") from e
            except PydanticValidationError as e:
                logger.exception(f"Invalid document structure in {self.path}")
                raise StorageError(f"Invalid document {self.path}: {e}") from e

    def save(self, document: Document) -> None:
        """Rewrite the whole document"""
        with self._lock:
            self._ensure_file()
            try:
                self._write(document)
            except OSError as e:
                logger.exception(f"Failed to write {self.path}")
                raise StorageError(f"Cannot write {self.path}: {e}") from e

    def _write(self, document: Document) -> None:
        payload = json.dumps(document.to_json_dict(), indent=2, ensure_ascii=False)
        fd, tmp_path = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except BaseException:
            # leave no stray temp files behind; the previous document is untouched
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        """
        Run one read-modify-write cycle.

        Usage:
            with store.transaction() as doc:
                doc.tasks.append(task)

        The document is written back only if the block exits normally;
        on any exception the on-disk document stays as it was.
        """
        with self._lock:
            document = self.load()
            yield document
            self.save(document)


_store: Optional[DocumentStore] = None


def get_store() -> DocumentStore:
    """
    Dependency function for FastAPI routes.

    Usage:
        @router.get("/example")
        async def example(store: DocumentStore = Depends(get_store)):
            ...
    """
    global _store
    if _store is None:
        _store = DocumentStore(DB_PATH)
        logger.info(f"Document store ready at {_store.path}")
    return _store
