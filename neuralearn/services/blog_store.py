"""Admin blog storage.

Blogs never reach the relational database. They live as a JSON array under a
single key of a small file-backed key/value store, and every operation is a
synchronous read-modify-write of that whole array.
"""
import json
import logging
import os
import tempfile
import time
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional

from neuralearn.core.config import LOCAL_STORAGE_PATH

logger = logging.getLogger(__name__)

BLOGS_KEY = "neuralearn_blogs"
EXCERPT_LENGTH = 150
DEFAULT_CATEGORY = "Tutorial"


class BlogError(Exception):
    pass


class LocalStorage:
    """String key/value pairs persisted as one JSON object on disk."""

    def __init__(self, path: str = LOCAL_STORAGE_PATH):
        self.path = path

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as fh:
            try:
                data = json.load(fh)
            except ValueError as e:
                raise BlogError(f"Corrupt storage file: {self.path}") from e
        if not isinstance(data, dict):
            raise BlogError(f"Corrupt storage file: {self.path}")
        return data

    def _dump(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        # write-then-rename keeps the previous file intact if the write fails
        fd, tmp = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False)
            os.replace(tmp, self.path)
        except Exception:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._dump(data)


@dataclass
class Blog:
    id: str
    title: str
    content: str
    excerpt: str
    category: str
    isPublished: bool
    createdAt: str


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def sample_blogs() -> List[Blog]:
    return [
        Blog(
            id="1",
            title="Getting Started with Data Structures",
            excerpt="Learn the fundamentals of data structures and their importance in computer science.",
            content=(
                "Data structures are fundamental concepts in computer science that allow us to organize and store "
                "data efficiently. In this tutorial, we will explore the most common data structures including arrays, "
                "linked lists, stacks, queues, trees, and graphs. Understanding these concepts is crucial for writing "
                "efficient algorithms and solving complex programming problems."
            ),
            category=DEFAULT_CATEGORY,
            isPublished=True,
            createdAt=_now_iso(),
        )
    ]


class BlogStore:
    def __init__(self, storage: Optional[LocalStorage] = None, key: str = BLOGS_KEY):
        self.storage = storage or LocalStorage()
        self.key = key

    def _write(self, blogs: List[Blog]) -> None:
        self.storage.set_item(self.key, json.dumps([asdict(b) for b in blogs], ensure_ascii=False))

    def list(self) -> List[Blog]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            blogs = sample_blogs()
            self._write(blogs)
            return blogs
        try:
            return [Blog(**item) for item in json.loads(raw)]
        except (ValueError, TypeError) as e:
            raise BlogError(f"Stored blogs are unreadable: {e}") from e

    def create(self, title: str, content: str, excerpt: str = "", category: str = DEFAULT_CATEGORY,
               is_published: bool = True) -> Blog:
        if not title or not content:
            raise BlogError("Please fill in title and content")
        blogs = self.list()
        blog = Blog(
            id=str(int(time.time() * 1000)),
            title=title,
            excerpt=excerpt or content[:EXCERPT_LENGTH] + "...",
            content=content,
            category=category,
            isPublished=is_published,
            createdAt=_now_iso(),
        )
        self._write([blog] + blogs)
        logger.info(f"Blog created: {blog.id}")
        return blog

    def delete(self, blog_id: str) -> int:
        blogs = self.list()
        kept = [b for b in blogs if b.id != blog_id]
        self._write(kept)
        removed = len(blogs) - len(kept)
        logger.info(f"Blog {blog_id} deleted ({removed} removed)")
        return removed
