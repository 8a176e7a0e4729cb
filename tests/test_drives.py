import os
from pathlib import Path

from preflight.drives import volume_usage


def test_volume_usage_for_existing_directory(tmp_path: Path) -> None:
    usage = volume_usage(str(tmp_path))
    assert usage is not None
    assert usage.total >= usage.free
    assert 0.0 <= usage.percent <= 100.0
    assert os.path.ismount(usage.mountpoint)
    assert str(tmp_path).startswith(usage.mountpoint)


def test_volume_usage_for_missing_path(tmp_path: Path) -> None:
    assert volume_usage(str(tmp_path / "missing")) is None
