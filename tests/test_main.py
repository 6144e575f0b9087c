import pytest

from minigames.main import run


class StubApp:
    def __init__(self):
        self.calls = []

    def shutdown(self):
        self.calls.append("shutdown")

    def handle_event(self, event):
        self.calls.append("event")


def interrupted():
    raise KeyboardInterrupt


def test_ctrl_c_shuts_the_app_down():
    app = StubApp()
    with pytest.raises(SystemExit):
        run(app, get_events=interrupted)
    assert app.calls == ["shutdown"]
