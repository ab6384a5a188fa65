import pytest


class RecordingLoader:
    """Stands in for GPU texture upload; hands out increasing ids."""

    def __init__(self, first_id=7):
        self.calls = []
        self._next_id = first_id

    def __call__(self, path, gamma=False):
        self.calls.append((path, gamma))
        handle = self._next_id
        self._next_id += 1
        return handle


@pytest.fixture
def loader():
    return RecordingLoader()
