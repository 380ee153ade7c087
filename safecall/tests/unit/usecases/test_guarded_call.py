import threading
import time
from contextlib import contextmanager

import pytest

from safecall.adapters import diagnostics as diagnostics_mod
from safecall.adapters import platform_strings
from safecall.adapters.diagnostics import (
    SharedDiagnostics,
    ThreadLocalDiagnostics,
    active_diagnostics,
)
from safecall.domain.arguments import OMITTED, Provided
from safecall.domain.config import CallConfig
from safecall.domain.errors import PrimitiveCallError, StringsError
from safecall.domain.ports import Diagnostic
from safecall.domain.sentinels import equals, is_none
from safecall.usecases.guarded_call import GuardedCall


class _RecordingDiagnostics:
    def __init__(self):
        self.events = []
        self._diagnostic = None

    def clear(self):
        self.events.append("clear")
        self._diagnostic = None

    def report(self, message, source=None):
        self.events.append(f"report:{message}")
        self._diagnostic = Diagnostic(message=message, source=source)

    def last(self):
        self.events.append("last")
        return self._diagnostic

    @contextmanager
    def guard(self):
        self.events.append("enter")
        try:
            yield
        finally:
            self.events.append("exit")


class _PrimitiveStub:
    def __init__(self, result, diagnostics=None, message=None):
        self.result = result
        self.diagnostics = diagnostics
        self.message = message
        self.calls = []

    def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        if self.diagnostics is not None:
            self.diagnostics.events.append("call")
            if self.message:
                self.diagnostics.report(self.message, source="stub")
        return self.result


def test_success_returns_result_unchanged():
    payload = {"a": 1}
    call = GuardedCall(_PrimitiveStub(payload), diagnostics=ThreadLocalDiagnostics())

    assert call("x") is payload


@pytest.mark.parametrize("value", ["", 0, b"", {}, [], None, 0.0])
def test_falsy_results_are_not_failures(value):
    call = GuardedCall(_PrimitiveStub(value), diagnostics=ThreadLocalDiagnostics())

    assert call() is value


def test_sentinel_raises_with_reported_message():
    diagnostics = _RecordingDiagnostics()
    primitive = _PrimitiveStub(False, diagnostics, message="prim(): broken input")
    call = GuardedCall(primitive, diagnostics=diagnostics, name="prim")

    with pytest.raises(PrimitiveCallError) as excinfo:
        call("bad")

    assert excinfo.value.message == "prim(): broken input"
    assert excinfo.value.primitive == "prim"
    assert excinfo.value.diagnostic == Diagnostic("prim(): broken input", "stub")


def test_clear_call_read_order_inside_guard():
    diagnostics = _RecordingDiagnostics()
    primitive = _PrimitiveStub("ok", diagnostics)
    call = GuardedCall(primitive, diagnostics=diagnostics)

    call()

    assert diagnostics.events == ["enter", "clear", "call", "last", "exit"]


def test_stale_diagnostic_does_not_leak_into_next_failure():
    diagnostics = _RecordingDiagnostics()
    diagnostics.report("older failure")
    primitive = _PrimitiveStub(False, diagnostics)
    call = GuardedCall(primitive, diagnostics=diagnostics)

    with pytest.raises(PrimitiveCallError) as excinfo:
        call()

    assert excinfo.value.message == "An error occured"
    assert excinfo.value.diagnostic is None


def test_fallback_message_comes_from_config():
    call = GuardedCall(
        _PrimitiveStub(False),
        diagnostics=ThreadLocalDiagnostics(),
        config=CallConfig(unknown_error_message="primitive failed"),
    )

    with pytest.raises(PrimitiveCallError, match="primitive failed"):
        call()


def test_custom_failure_predicate_and_error_class():
    call = GuardedCall(
        _PrimitiveStub(-1),
        failure=equals(-1),
        diagnostics=ThreadLocalDiagnostics(),
        error_cls=StringsError,
    )

    with pytest.raises(StringsError):
        call()


def test_false_is_a_valid_result_when_sentinel_is_none():
    call = GuardedCall(_PrimitiveStub(False), failure=is_none, diagnostics=ThreadLocalDiagnostics())

    assert call() is False


def test_omitted_arguments_are_not_forwarded():
    primitive = _PrimitiveStub("ok")
    call = GuardedCall(primitive, diagnostics=ThreadLocalDiagnostics())

    call("abc", 1, OMITTED, flag=OMITTED, mode=Provided(2))

    assert primitive.calls == [(("abc", 1), {"mode": 2})]


def test_gap_in_positional_arguments_is_rejected():
    primitive = _PrimitiveStub("ok")
    call = GuardedCall(primitive, diagnostics=ThreadLocalDiagnostics())

    with pytest.raises(TypeError):
        call("abc", OMITTED, 3)
    assert primitive.calls == []


def test_primitive_exceptions_propagate():
    def _explode():
        raise ValueError("boom")

    call = GuardedCall(_explode, diagnostics=ThreadLocalDiagnostics())

    with pytest.raises(ValueError, match="boom"):
        call()


def test_name_defaults_to_primitive_name():
    def sample_primitive():
        return False

    call = GuardedCall(sample_primitive, diagnostics=ThreadLocalDiagnostics())

    with pytest.raises(PrimitiveCallError) as excinfo:
        call()
    assert excinfo.value.primitive == "sample_primitive"


def test_shared_slot_serializes_concurrent_failures():
    diagnostics = SharedDiagnostics()

    def _failing(tag):
        diagnostics.report(f"failure {tag}")
        time.sleep(0.001)
        return False

    call = GuardedCall(_failing, diagnostics=diagnostics)
    messages = {}

    def _worker(tag):
        try:
            call(tag)
        except PrimitiveCallError as exc:
            messages[tag] = exc.message

    threads = [threading.Thread(target=_worker, args=(tag,)) for tag in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert messages == {tag: f"failure {tag}" for tag in range(8)}


def test_injected_slot_receives_platform_diagnostics(monkeypatch):
    process_default = ThreadLocalDiagnostics()
    monkeypatch.setattr(diagnostics_mod, "_default", process_default)
    injected = ThreadLocalDiagnostics()
    call = GuardedCall(platform_strings.hex2bin, diagnostics=injected)

    with pytest.raises(PrimitiveCallError) as excinfo:
        call("abc")

    assert excinfo.value.message == "hex2bin(): Hexadecimal input string must have an even length"
    assert injected.last().source == "hex2bin"
    assert process_default.last() is None


def test_injected_slot_is_unbound_after_the_call(monkeypatch):
    process_default = ThreadLocalDiagnostics()
    monkeypatch.setattr(diagnostics_mod, "_default", process_default)
    call = GuardedCall(platform_strings.hex2bin, diagnostics=SharedDiagnostics())

    assert call("6869") == b"hi"
    assert active_diagnostics() is process_default
