import pytest

from tests.fake_cloud import FakeCloud
from vmlicense.storage.backup_writer import BackupWriter


@pytest.fixture
def cloud() -> FakeCloud:
    return FakeCloud()


@pytest.fixture
def backup_writer(tmp_path) -> BackupWriter:
    return BackupWriter(str(tmp_path / "backups"))
