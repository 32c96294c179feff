import pytest
from PySide6.QtCore import QCoreApplication


@pytest.fixture(scope="session")
def qapp():
    """One Qt core application for every test that touches QObject/QThread."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
