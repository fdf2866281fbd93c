import pytest

from tests.fakes import write_table


@pytest.fixture
def data_dir(tmp_path):
    """Data directory seeded with a few idioms for en<->hi."""
    directory = tmp_path / "data"
    write_table(directory / "en-hi-idioms.csv", [
        ("good morning", "सुप्रभात"),
        ("break a leg", "शुभकामनाएं"),
    ])
    write_table(directory / "hi-en-idioms.csv", [
        ("सुप्रभात", "good morning"),
    ])
    return directory


@pytest.fixture
def uploads_dir(tmp_path):
    directory = tmp_path / "uploads" / "messages"
    directory.mkdir(parents=True)
    return directory
