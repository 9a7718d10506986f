import errno
import os
import shutil

import pytest

from linkscan.errors import LinkInspectionError, PathNotFoundError, TargetAccessError
from linkscan.inspection import LinkClassifier
from linkscan.models import LinkCategory, LinkRecord


def test_regular_file_is_not_a_link(link_tree):
    result = LinkClassifier().inspect(str(link_tree.src))
    assert result.is_link is False
    assert result.is_dir is False


def test_directory_is_not_a_link(link_tree):
    result = LinkClassifier().inspect(str(link_tree.dir))
    assert result.is_link is False
    assert result.is_dir is True


def test_valid_link_to_file(link_tree):
    result = LinkClassifier().inspect(str(link_tree.good))
    assert result.is_link is True
    assert result.is_dir is False
    assert result.target == "src"
    assert result.category == LinkCategory.VALID


def test_valid_link_to_directory(link_tree):
    result = LinkClassifier().inspect(str(link_tree.dirlink))
    assert result.is_link is True
    assert result.is_dir is True
    assert result.target == "dir"
    assert result.category == LinkCategory.VALID


def test_relative_target_resolves_against_link_directory(link_tree):
    result = LinkClassifier().inspect(str(link_tree.dirfilelink))
    assert result.category == LinkCategory.VALID
    assert result.target == "dirfile"


def test_absolute_target(link_tree):
    absolute = link_tree.root / "absolute"
    os.symlink(str(link_tree.src), absolute)
    result = LinkClassifier().inspect(str(absolute))
    assert result.category == LinkCategory.VALID
    assert result.target == str(link_tree.src)


def test_dangling_link_keeps_raw_target(link_tree):
    result = LinkClassifier().inspect(str(link_tree.broken))
    assert result.is_link is True
    assert result.is_dir is False
    assert result.target == "brk"
    assert result.category == LinkCategory.DANGLING


def test_link_through_a_file_is_dangling(link_tree):
    through_file = link_tree.root / "through"
    os.symlink("src/child", through_file)
    result = LinkClassifier().inspect(str(through_file))
    assert result.category == LinkCategory.DANGLING
    assert result.target == "src/child"


def test_self_referencing_link_is_dangling(link_tree):
    loop = link_tree.root / "loop"
    os.symlink("loop", loop)
    result = LinkClassifier().inspect(str(loop))
    assert result.category == LinkCategory.DANGLING
    assert result.target == "loop"


def test_invalid_utf8_target_is_malformed_and_escaped(link_tree):
    bad = os.path.join(os.fsencode(link_tree.root), b"bad")
    os.symlink(b"bad\xff", bad)
    result = LinkClassifier().inspect(os.fsdecode(bad))
    assert result.is_link is True
    assert result.category == LinkCategory.MALFORMED
    assert result.target == '"bad\\xff"'
    assert result.to_record() == LinkRecord(target='"bad\\xff"', category=LinkCategory.MALFORMED)


def test_missing_path_raises(link_tree):
    with pytest.raises(PathNotFoundError):
        LinkClassifier().inspect(str(link_tree.root / "nope"))


def test_permission_error_on_target_is_not_dangling(link_tree, monkeypatch):
    real_stat = os.stat
    candidate = os.path.join(os.fsencode(link_tree.root), b"src")

    def fake_stat(path, *args, **kwargs):
        if path == candidate:
            raise PermissionError(errno.EACCES, "Permission denied")
        return real_stat(path, *args, **kwargs)

    monkeypatch.setattr(os, "stat", fake_stat)
    with pytest.raises(TargetAccessError) as exc_info:
        LinkClassifier().inspect(str(link_tree.good))
    assert exc_info.value.path == str(link_tree.good)
    assert isinstance(exc_info.value, LinkInspectionError)


def test_lstat_failure_is_raised(link_tree, monkeypatch):
    def fake_lstat(path, *args, **kwargs):
        raise PermissionError(errno.EACCES, "Permission denied")

    monkeypatch.setattr(os, "lstat", fake_lstat)
    with pytest.raises(LinkInspectionError) as exc_info:
        LinkClassifier().inspect(str(link_tree.good))
    assert not isinstance(exc_info.value, PathNotFoundError)


def test_non_link_cannot_be_recorded(link_tree):
    result = LinkClassifier().inspect(str(link_tree.src))
    with pytest.raises(ValueError):
        result.to_record()


def test_valid_link_keeps_undecodable_target_bytes(link_tree):
    root = os.fsencode(link_tree.root)
    open(os.path.join(root, b"t\xff"), "w").close()
    os.symlink(b"t\xff", os.path.join(root, b"odd"))

    result = LinkClassifier().inspect(str(link_tree.root / "odd"))
    assert result.category == LinkCategory.VALID
    assert os.fsencode(result.target) == b"t\xff"
    assert "\ufffd" not in result.target


def test_path_below_a_replaced_directory_is_not_found(link_tree):
    shutil.rmtree(link_tree.dir)
    link_tree.dir.write_text("now a file")
    with pytest.raises(PathNotFoundError):
        LinkClassifier().inspect(str(link_tree.dirfilelink))
