# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, Protocol

import requests

from tracklines.error import StorageError

API_DATA_PATH = "/api/data"


class DocumentStore(Protocol):
    """
    Holds the whole user data document. There is no partial update: every
    save replaces the document, and the last save wins.
    """

    def load(self) -> Optional[str]: ...

    def save(self, document: str) -> None: ...


class FileDocumentStore:
    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Optional[str]:
        if not self.path.is_file():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e

    def save(self, document: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(document, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e

    def __repr__(self) -> str:
        return f"{FileDocumentStore.__name__}({str(self.path)!r})"


class HttpDocumentStore:
    """
    Document kept by a server answering GET and POST on /api/data with the
    document as plain text. A server with nothing stored answers "null".
    """

    def __init__(self, base_url: str, timeout: float = 10.0) -> None:
        self.url = base_url.rstrip("/") + API_DATA_PATH
        self.timeout = timeout

    def load(self) -> Optional[str]:
        try:
            response = requests.get(self.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise StorageError(f"Cannot load user data from {self.url}: {e}") from e
        if response.text.strip() in ("", "null"):
            return None
        return response.text

    def save(self, document: str) -> None:
        try:
            response = requests.post(
                self.url,
                data=document.encode("utf-8"),
                headers={"Content-Type": "text/plain; charset=utf-8"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise StorageError(f"Cannot save user data to {self.url}: {e}") from e

    def __repr__(self) -> str:
        return f"{HttpDocumentStore.__name__}({self.url!r})"
