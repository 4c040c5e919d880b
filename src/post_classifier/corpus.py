"""Corpus reader for delimited files of labeled posts.

The first row of a corpus file names its columns; every following row
supplies one post. Only the ``tag`` and ``content`` columns are used, in
whatever order they appear, and quoted fields may span lines::

    tag,content
    sports,the game was great
    politics,"the election results, finally"
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .exceptions import CorpusOpenError, MalformedCorpusError
from .models import Post

logger = logging.getLogger(__name__)


@dataclass
class CorpusReader:
    """Streams ``Post`` records out of a delimited file.

    Args:
        delimiter: Field separator character.
        encoding: Text encoding of the file. The default accepts a leading
            UTF-8 byte order mark, as written by spreadsheet exports.
        tag_field: Name of the column holding the label.
        content_field: Name of the column holding the post text.
    """

    delimiter: str = ","
    encoding: str = "utf-8-sig"
    tag_field: str = "tag"
    content_field: str = "content"

    def read(self, path: str | Path) -> Iterator[Post]:
        """Yield posts from ``path`` lazily, in file order.

        Raises:
            CorpusOpenError: If the file does not exist or cannot be read.
            MalformedCorpusError: If a required column is missing or a row
                has a different number of fields than the header.
        """
        path = Path(path)
        try:
            handle = open(path, "r", encoding=self.encoding, newline="")
        except OSError as exc:
            raise CorpusOpenError(path, exc.strerror or str(exc)) from exc

        with handle:
            logger.debug("Reading corpus from %s", path)
            reader = csv.reader(handle, delimiter=self.delimiter)
            try:
                header = next(reader, None)
                if header is None:
                    raise MalformedCorpusError("missing header row", path=path, line=1)
                tag_idx, content_idx = self._column_indices(header, path)

                count = 0
                for row in reader:
                    if not row:
                        continue
                    if len(row) != len(header):
                        raise MalformedCorpusError(
                            f"expected {len(header)} fields, got {len(row)}",
                            path=path,
                            line=reader.line_num,
                        )
                    count += 1
                    yield Post(tag=row[tag_idx], content=row[content_idx])
            except csv.Error as exc:
                raise MalformedCorpusError(str(exc), path=path, line=reader.line_num) from exc
            except UnicodeDecodeError as exc:
                raise MalformedCorpusError(
                    f"cannot decode as {self.encoding}: {exc.reason}",
                    path=path,
                    line=reader.line_num + 1,
                ) from exc

        logger.debug("Read %d posts from %s", count, path)

    def read_all(self, path: str | Path) -> list[Post]:
        """Read the whole corpus into a list."""
        return list(self.read(path))

    def _column_indices(self, header: list[str], path: Path) -> tuple[int, int]:
        names = [name.strip() for name in header]
        missing = [
            field for field in (self.tag_field, self.content_field)
            if field not in names
        ]
        if missing:
            raise MalformedCorpusError(
                f"missing required column(s): {', '.join(missing)}",
                path=path,
                line=1,
            )
        return names.index(self.tag_field), names.index(self.content_field)


def read_posts(path: str | Path, **options) -> Iterator[Post]:
    """Convenience wrapper around ``CorpusReader(**options).read(path)``."""
    return CorpusReader(**options).read(path)
