import pytest

from drawing_lib.blobstore import BlobInfo, MemoryBlobStore, create_blob_store
from drawing_lib.blobstore.interfaces import BlobStoreProtocol
from drawing_lib.errors import BlobNotFoundError


def test_memory_basic_operations():
    m = MemoryBlobStore()
    m.create_repository()

    m.add_blob(BlobInfo('k', b'v', 'alice'))
    assert m.get_blob('k') == b'v'
    assert m.list_blob_keys() == ['k']

    m.copy_blob('k', 'k2', 'bob')
    assert m.get_blob('k2') == b'v'
    assert m.get_blob('k') == b'v'

    m.delete_blob('k', 'carol')
    with pytest.raises(BlobNotFoundError):
        m.get_blob('k')
    assert m.list_blob_keys() == ['k2']


def test_memory_missing_keys_raise():
    m = MemoryBlobStore()
    with pytest.raises(BlobNotFoundError):
        m.get_blob('nope')
    with pytest.raises(BlobNotFoundError):
        m.delete_blob('nope', 'alice')
    with pytest.raises(BlobNotFoundError):
        m.copy_blob('nope', 'other', 'alice')
    assert m.list_blob_keys() == []
    assert m.commits() == []


def test_memory_commits_attribute_actors():
    m = MemoryBlobStore()
    m.add_blob(BlobInfo('a', b'1', 'alice'))
    m.copy_blob('a', 'b', 'bob')
    m.delete_blob('a', 'carol')
    log = m.commits()
    assert [(c.sequence, c.action, c.key, c.actor) for c in log] == [
        (1, 'add', 'a', 'alice'),
        (2, 'copy', 'b', 'bob'),
        (3, 'delete', 'a', 'carol'),
    ]
    assert log[1].source_key == 'a'
    assert log[0].digest == log[1].digest
    assert log[2].digest is None


def test_create_blob_store_factory(tmp_path):
    assert isinstance(create_blob_store('memory'), MemoryBlobStore)
    assert isinstance(create_blob_store('file', tmp_path), BlobStoreProtocol)
    with pytest.raises(ValueError):
        create_blob_store('file')
    with pytest.raises(ValueError):
        create_blob_store('git', tmp_path)
