import pytest
from PySide6 import QtCore


@pytest.fixture(scope="session")
def qapp():
    app = QtCore.QCoreApplication.instance()
    if app is None:
        app = QtCore.QCoreApplication([])
    return app
