import pytest
import requests

from smart_translate.action import OutputAction, TranslateAction, choose_output, dispatch_output
from smart_translate.host import Host, Modifiers
from smart_translate.packages.translator import Options, Translator

from conftest import FakeSession, completion, make_response


class _Host(Host):
    def __init__(self, modifiers=Modifiers()):
        self._modifiers = modifiers
        self.calls = []

    def modifiers(self) -> Modifiers:
        self.calls.append(("modifiers",))
        return self._modifiers

    def paste_text(self, text: str) -> None:
        self.calls.append(("paste", text))

    def copy_text(self, text: str) -> None:
        self.calls.append(("copy", text))

    def show_success(self) -> None:
        self.calls.append(("success",))

    def show_text(self, text: str) -> None:
        self.calls.append(("show", text))


def _action(session):
    return TranslateAction(lambda options: Translator(options.apikey, session=session))


OPTIONS = Options(apikey="sk-test", model="gpt-4o", from_lang="Chinese", to_lang="English")


@pytest.mark.parametrize(
    "shift, option, expected",
    [
        (True, True, OutputAction.PASTE_ONLY),
        (True, False, OutputAction.COPY_ONLY),
        (False, False, OutputAction.PASTE_AND_NOTIFY),
        (False, True, OutputAction.PASTE_AND_NOTIFY),
    ],
)
def test_choose_output(shift, option, expected):
    assert choose_output(Modifiers(shift=shift, option=option)) is expected


def test_dispatch_paste_only():
    host = _Host()
    dispatch_output("Bonjour", OutputAction.PASTE_ONLY, host)
    assert host.calls == [("paste", "Bonjour")]


def test_dispatch_copy_only():
    host = _Host()
    dispatch_output("Bonjour", OutputAction.COPY_ONLY, host)
    assert host.calls == [("copy", "Bonjour")]


def test_dispatch_paste_and_notify():
    host = _Host()
    dispatch_output("Bonjour", OutputAction.PASTE_AND_NOTIFY, host)
    assert host.calls == [("paste", "Bonjour"), ("success",)]


def test_execute_end_to_end_without_modifiers():
    session = FakeSession(response=make_response(200, completion("Hello")))
    host = _Host()

    assert _action(session).execute("你好", OPTIONS, host) is True

    assert host.calls == [("modifiers",), ("paste", "Hello"), ("success",)]
    messages = session.calls[0]["json"]["messages"]
    assert messages[1] == {"role": "user", "content": "你好"}
    assert "Chinese" in messages[0]["content"]


def test_execute_with_shift_copies():
    session = FakeSession(response=make_response(200, completion("Bonjour")))
    host = _Host(Modifiers(shift=True))

    _action(session).execute("Hello", OPTIONS, host)

    assert ("copy", "Bonjour") in host.calls
    assert not any(call[0] in ("paste", "success") for call in host.calls)


def test_execute_with_shift_option_pastes_without_success():
    session = FakeSession(response=make_response(200, completion("Bonjour")))
    host = _Host(Modifiers(shift=True, option=True))

    _action(session).execute("Hello", OPTIONS, host)

    assert host.calls == [("modifiers",), ("paste", "Bonjour")]


def test_execute_provider_error_is_shown():
    payload = {"error": {"message": "Invalid API key"}}
    session = FakeSession(response=make_response(401, payload))
    host = _Host()

    assert _action(session).execute("Hello", OPTIONS, host) is False

    assert host.calls == [("show", "Message from OpenAI (code 401): Invalid API key")]


def test_execute_transport_error_is_shown():
    session = FakeSession(error=requests.ConnectionError("timeout"))
    host = _Host()

    assert _action(session).execute("Hello", OPTIONS, host) is False

    assert host.calls == [("show", "timeout")]


def test_execute_unexpected_shape_is_shown():
    session = FakeSession(response=make_response(200, {"id": "x"}))
    host = _Host()

    assert _action(session).execute("Hello", OPTIONS, host) is False

    assert len(host.calls) == 1
    kind, message = host.calls[0]
    assert kind == "show"
    assert message.startswith("Unexpected response from OpenAI")


class _BrokenClipboardHost(_Host):
    def copy_text(self, text: str) -> None:
        raise RuntimeError("no clipboard mechanism")


def test_execute_output_failure_is_shown():
    session = FakeSession(response=make_response(200, completion("Bonjour")))
    host = _BrokenClipboardHost(Modifiers(shift=True))

    assert _action(session).execute("Hello", OPTIONS, host) is False

    assert host.calls == [("modifiers",), ("show", "no clipboard mechanism")]
