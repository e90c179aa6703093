import pytest

from wowstudio.mapped_file import MappedFile, MappedFileMode, MappedFileOpenMode


@pytest.fixture
def sample(tmp_path):
    path = tmp_path / "sample.bin"
    path.write_bytes(b"0123456789abcdef")
    return path


def test_read_whole_file(sample):
    with MappedFile(sample) as mapped:
        assert mapped.is_open()
        assert mapped.size() == 16
        assert mapped.data() == b"0123456789abcdef"


def test_sequential_reads_advance_cursor(sample):
    with MappedFile(sample) as mapped:
        assert mapped.read(4) == b"0123"
        assert mapped.read(2) == b"45"
        assert mapped.position == 6


def test_read_with_offset_moves_cursor(sample):
    with MappedFile(sample) as mapped:
        assert mapped.read(3, offset=10) == b"abc"
        assert mapped.read(1) == b"d"


def test_read_past_end_raises(sample):
    with MappedFile(sample) as mapped:
        with pytest.raises(ValueError):
            mapped.read(4, offset=14)


def test_write_in_read_mode_raises(sample):
    with MappedFile(sample, MappedFileMode.READ) as mapped:
        with pytest.raises(PermissionError):
            mapped.write(b"x")


def test_write_persists_after_close(sample):
    with MappedFile(sample, MappedFileMode.BOTH) as mapped:
        mapped.write(b"XY", offset=2)
        mapped.write(b"Z")
        mapped.flush()
    assert sample.read_bytes() == b"01XYZ56789abcdef"


def test_small_write_grows_by_one_kilobyte(sample):
    with MappedFile(sample, MappedFileMode.BOTH) as mapped:
        mapped.write(b"x" * 20, offset=0)
        assert mapped.size() == 16 + 1024
        assert mapped.read(20, offset=0) == b"x" * 20
    assert sample.stat().st_size == 16 + 1024


def test_large_write_grows_by_one_megabyte(sample):
    with MappedFile(sample, MappedFileMode.BOTH) as mapped:
        mapped.write(b"y" * 2000, offset=0)
        assert mapped.size() == 16 + 1024 * 1024


def test_create_with_size(tmp_path):
    path = tmp_path / "new.bin"
    with MappedFile(path, MappedFileMode.BOTH, MappedFileOpenMode.CREATE_NEW, 64) as mapped:
        assert mapped.size() == 64
        assert mapped.data() == bytes(64)
    assert path.stat().st_size == 64


def test_create_new_on_existing_file_raises(sample):
    with pytest.raises(FileExistsError):
        MappedFile(sample, MappedFileMode.BOTH, MappedFileOpenMode.CREATE_NEW, 32)


def test_open_existing_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        MappedFile(tmp_path / "missing.bin")


def test_empty_new_file_raises_and_is_removed(tmp_path):
    path = tmp_path / "empty.bin"
    with pytest.raises(ValueError):
        MappedFile(path, MappedFileMode.BOTH, MappedFileOpenMode.OPEN_ALWAYS)
    assert not path.exists()


def test_resize_keeps_contents(sample):
    with MappedFile(sample, MappedFileMode.BOTH) as mapped:
        mapped.resize(32)
        assert mapped.size() == 32
        assert mapped.data()[:16] == b"0123456789abcdef"
        assert mapped.data()[16:] == bytes(16)


def test_flush_range_reaches_disk(tmp_path):
    path = tmp_path / "big.bin"
    with MappedFile(path, MappedFileMode.BOTH, MappedFileOpenMode.CREATE_NEW, 8192) as mapped:
        mapped.write(b"DATA", offset=5000)
        mapped.flush(5000, 4)
        assert path.read_bytes()[5000:5004] == b"DATA"


def test_flush_outside_mapping_raises(sample):
    with MappedFile(sample, MappedFileMode.BOTH) as mapped:
        with pytest.raises(ValueError):
            mapped.flush(10, 100)


def test_close_is_idempotent_and_blocks_access(sample):
    mapped = MappedFile(sample)
    mapped.close()
    mapped.close()
    assert not mapped.is_open()
    with pytest.raises(ValueError):
        mapped.read(1)