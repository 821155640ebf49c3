import zipfile
from pathlib import Path

import pytest


@pytest.fixture
def make_xpz(tmp_path: Path):
    """Build an .xpz archive from a mapping of member names to contents."""
    def _make(members: dict[str, str], name: str = "export.xpz") -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as archive:
            for member_name, content in members.items():
                archive.writestr(member_name, content)
        return path

    return _make
