"""
Null-Hash Table Unit Tests
Tests for zksmt/merkle/null_hashes.py
"""
import threading

import pytest

from zksmt.crypto.element import NULL
from zksmt.crypto.hashing import get_hasher
from zksmt.merkle.null_hashes import (
    NULL_TABLE_SIZE,
    build_null_hash_table,
    null_hash_table,
)


@pytest.mark.parametrize("name", ["poseidon", "sha256"])
class TestTableContents:
    """Tests for the recurrence T[0] = NULL, T[i+1] = merge(T[i], T[i])."""

    def test_first_hash_is_null(self, name):
        assert null_hash_table(get_hasher(name))[0] == NULL

    def test_recurrence(self, name):
        hasher = get_hasher(name)
        table = null_hash_table(hasher)

        for i in range(len(table) - 1):
            assert table[i + 1] == hasher.merge(table[i], table[i])

    def test_size(self, name):
        assert len(null_hash_table(get_hasher(name))) == NULL_TABLE_SIZE == 128

    def test_entries_distinct(self, name):
        table = null_hash_table(get_hasher(name))

        assert len(set(table)) == len(table)


class TestSharing:
    """Tests for the process-wide, read-only table."""

    def test_same_table_per_hasher(self):
        assert null_hash_table(get_hasher("poseidon")) is null_hash_table(get_hasher("poseidon"))

    def test_tables_differ_between_hashers(self):
        poseidon = null_hash_table(get_hasher("poseidon"))
        sha = null_hash_table(get_hasher("sha256"))

        assert poseidon.hasher.name == "poseidon"
        assert sha.hasher.name == "sha256"
        assert poseidon[1] != sha[1]

    def test_read_only(self):
        table = null_hash_table(get_hasher())

        with pytest.raises(TypeError):
            table[0] = table[1]

    def test_build_matches_shared(self):
        hasher = get_hasher("sha256")

        assert list(build_null_hash_table(hasher)) == list(null_hash_table(hasher))

    def test_build_custom_size(self):
        table = build_null_hash_table(get_hasher("sha256"), size=4)

        assert len(table) == 4
        assert table[-1] == null_hash_table(get_hasher("sha256"))[3]

    def test_concurrent_first_access_consistent(self):
        hasher = get_hasher("sha256")
        results = []

        def read():
            results.append(list(null_hash_table(hasher)))

        threads = [threading.Thread(target=read) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 8
        assert all(r == results[0] for r in results)
        assert len(results[0]) == NULL_TABLE_SIZE
