"""Pytest fixtures for linkscan tests."""

import os
from dataclasses import dataclass
from pathlib import Path

import pytest


@dataclass
class LinkTree:
    root: Path
    src: Path
    good: Path
    broken: Path
    dir: Path
    dirlink: Path
    dirfile: Path
    dirfilelink: Path
    dir_recurse: Path


@pytest.fixture
def link_tree(tmp_path) -> LinkTree:
    """
    Small tree with one link of every interesting shape:

        tree/
          src
          good -> src
          broken -> brk            (dangling)
          dirlink -> dir
          dir/
            dirfile
            dirfilelink -> dirfile
            dirRecurse -> ../dir
    """
    root = tmp_path / "tree"
    root.mkdir()
    tree = LinkTree(
        root=root,
        src=root / "src",
        good=root / "good",
        broken=root / "broken",
        dir=root / "dir",
        dirlink=root / "dirlink",
        dirfile=root / "dir" / "dirfile",
        dirfilelink=root / "dir" / "dirfilelink",
        dir_recurse=root / "dir" / "dirRecurse",
    )
    tree.src.touch()
    os.symlink("src", tree.good)
    os.symlink("brk", tree.broken)
    tree.dir.mkdir()
    os.symlink("dir", tree.dirlink)
    tree.dirfile.touch()
    os.symlink("../dir", tree.dir_recurse)
    os.symlink("dirfile", tree.dirfilelink)
    return tree


@pytest.fixture
def db_dir(tmp_path) -> Path:
    return tmp_path / "db"
