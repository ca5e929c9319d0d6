from phalanx.fileutil import file_exists, is_dir, is_file


def test_file_exists_for_directory(tmp_path):
    assert file_exists(tmp_path) is True


def test_file_exists_for_missing_path(tmp_path):
    assert file_exists(tmp_path / "missing") is False


def test_file_exists_accepts_str(tmp_path):
    target = tmp_path / "a.txt"
    target.write_text("x")
    assert file_exists(str(target)) is True


def test_is_file_for_created_file(tmp_path):
    target = tmp_path / "empty.txt"
    target.touch()
    assert is_file(target) is True


def test_is_file_for_directory(tmp_path):
    assert is_file(tmp_path) is False


def test_is_file_for_missing_path(tmp_path):
    assert is_file(tmp_path / "missing.txt") is False


def test_is_dir_for_directory(tmp_path):
    assert is_dir(tmp_path) is True


def test_is_dir_for_file(tmp_path):
    target = tmp_path / "empty.txt"
    target.touch()
    assert is_dir(target) is False


def test_is_dir_for_missing_path(tmp_path):
    assert is_dir(tmp_path / "missing") is False