from tipster.bus.emitter import EventEmitter


def test_handlers_run_in_subscription_order() -> None:
    emitter = EventEmitter()
    calls: list[str] = []
    emitter.on("e", lambda *_: calls.append("a"))
    emitter.on("e", lambda *_: calls.append("b"))
    emitter.emit("e", 1)
    assert calls == ["a", "b"]


def test_emit_passes_arguments() -> None:
    emitter = EventEmitter()
    seen: list[tuple] = []
    emitter.on("e", lambda *args: seen.append(args))
    emitter.emit("e")
    emitter.emit("e", {"visible": True})
    assert seen == [(), ({"visible": True},)]


def test_off_single_and_all_handlers() -> None:
    emitter = EventEmitter()
    calls: list[str] = []

    def first(*_) -> None:
        calls.append("first")

    def second(*_) -> None:
        calls.append("second")

    emitter.on("e", first).on("e", second)
    emitter.off("e", first)
    emitter.emit("e")
    assert calls == ["second"]

    emitter.off("e")
    emitter.emit("e")
    assert calls == ["second"]
    assert not emitter.has_listeners("e")
    emitter.off("never-subscribed", first)


def test_once_delivers_a_single_time() -> None:
    emitter = EventEmitter()
    calls: list[int] = []
    emitter.once("e", lambda value: calls.append(value))
    emitter.emit("e", 1)
    emitter.emit("e", 2)
    assert calls == [1]


def test_failing_handler_does_not_stop_others(log_messages) -> None:
    emitter = EventEmitter()
    calls: list[str] = []

    def broken(*_) -> None:
        raise ValueError("nope")

    emitter.on("e", broken)
    emitter.on("e", lambda *_: calls.append("ok"))
    emitter.emit("e")
    assert calls == ["ok"]
    assert any("event_handler_failed event=e" in m for m in log_messages)


def test_handler_added_during_emit_waits_for_next_emit() -> None:
    emitter = EventEmitter()
    calls: list[str] = []

    def adder(*_) -> None:
        calls.append("adder")
        emitter.on("e", lambda *_: calls.append("late"))

    emitter.on("e", adder)
    emitter.emit("e")
    assert calls == ["adder"]
