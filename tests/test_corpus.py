"""Tests for the delimited corpus reader."""

from __future__ import annotations

import pytest

from post_classifier.corpus import CorpusReader, read_posts
from post_classifier.exceptions import CorpusOpenError, MalformedCorpusError
from post_classifier.models import Post


class TestCorpusReader:
    def test_reads_posts_in_order(self, train_csv):
        posts = list(read_posts(train_csv))
        assert posts == [
            Post("sports", "the game was great"),
            Post("politics", "the election results"),
        ]

    def test_column_order_irrelevant(self, write_corpus):
        path = write_corpus("swapped.csv", "content,tag\nhello world,greeting\n")
        assert list(read_posts(path)) == [Post("greeting", "hello world")]

    def test_extra_columns_ignored(self, write_corpus):
        path = write_corpus("extra.csv", "n,tag,content,author\n1,a,some text,bob\n")
        assert list(read_posts(path)) == [Post("a", "some text")]

    def test_quoted_fields(self, write_corpus):
        path = write_corpus(
            "quoted.csv",
            'tag,content\nnews,"one, two, three"\nnews,"multi\nline post"\n',
        )
        posts = list(read_posts(path))
        assert posts[0].content == "one, two, three"
        assert posts[1].content == "multi\nline post"

    def test_blank_lines_skipped(self, write_corpus):
        path = write_corpus("blank.csv", "tag,content\n\na,x\n\nb,y\n")
        assert [p.tag for p in read_posts(path)] == ["a", "b"]

    def test_header_only(self, write_corpus):
        path = write_corpus("header.csv", "tag,content\n")
        assert list(read_posts(path)) == []

    def test_byte_order_mark_header(self, tmp_path):
        path = tmp_path / "excel.csv"
        path.write_bytes("tag,content\na,x\n".encode("utf-8-sig"))
        assert list(read_posts(path)) == [Post("a", "x")]

    def test_custom_delimiter(self, write_corpus):
        path = write_corpus("tabs.tsv", "tag\tcontent\na\tx, y\n")
        reader = CorpusReader(delimiter="\t")
        assert reader.read_all(path) == [Post("a", "x, y")]

    def test_custom_field_names(self, write_corpus):
        path = write_corpus("labels.csv", "label,text\nspam,buy now\n")
        reader = CorpusReader(tag_field="label", content_field="text")
        assert reader.read_all(path) == [Post("spam", "buy now")]

    def test_read_is_lazy(self, tmp_path):
        # Opening happens on first iteration, not on the call itself
        posts = read_posts(tmp_path / "missing.csv")
        with pytest.raises(CorpusOpenError):
            next(iter(posts))


class TestCorpusErrors:
    def test_missing_file(self, tmp_path):
        missing = tmp_path / "missing.csv"
        with pytest.raises(CorpusOpenError, match="Error opening file") as exc_info:
            list(read_posts(missing))
        assert exc_info.value.path == missing

    def test_open_error_is_os_error(self, tmp_path):
        with pytest.raises(OSError):
            list(read_posts(tmp_path / "missing.csv"))

    def test_directory_is_not_a_corpus(self, tmp_path):
        with pytest.raises(CorpusOpenError):
            list(read_posts(tmp_path))

    def test_missing_column(self, write_corpus):
        path = write_corpus("nocontent.csv", "tag,body\na,x\n")
        with pytest.raises(MalformedCorpusError, match="content") as exc_info:
            list(read_posts(path))
        assert exc_info.value.line == 1

    def test_empty_file(self, write_corpus):
        path = write_corpus("empty.csv", "")
        with pytest.raises(MalformedCorpusError, match="header"):
            list(read_posts(path))

    def test_too_many_fields(self, write_corpus):
        path = write_corpus("wide.csv", "tag,content\na,x\nb,y,z\n")
        with pytest.raises(MalformedCorpusError, match="expected 2 fields, got 3") as exc_info:
            list(read_posts(path))
        assert exc_info.value.line == 3
        assert exc_info.value.path == path

    def test_too_few_fields(self, write_corpus):
        path = write_corpus("narrow.csv", "tag,content\nlonely\n")
        with pytest.raises(ValueError):
            list(read_posts(path))

    def test_posts_before_bad_row_are_yielded(self, write_corpus):
        path = write_corpus("partial.csv", "tag,content\na,x\nb,y,z\n")
        posts = read_posts(path)
        assert next(posts) == Post("a", "x")
        with pytest.raises(MalformedCorpusError):
            next(posts)

    def test_bad_encoding(self, tmp_path):
        path = tmp_path / "latin1.csv"
        path.write_bytes("tag,content\na,caf\xe9\n".encode("latin-1"))
        with pytest.raises(MalformedCorpusError, match="decode"):
            list(read_posts(path))
        assert list(read_posts(path, encoding="latin-1")) == [Post("a", "caf\xe9")]
