from __future__ import annotations

from strategist.directives import DirectiveRegistry
from strategist.models import Directive, NotifyLevel, Position
from strategist.notify import BufferedNotifier, ConsoleNotifier


def test_create_if_absent_is_idempotent():
    registry = DirectiveRegistry()
    registry.current_tick = 17
    pos = Position("W15N5")

    assert registry.create_if_absent(pos, "colonize") is True
    assert registry.create_if_absent(Position("W15N5"), "colonize") is False
    assert len(registry) == 1
    assert ("colonize", pos) in registry
    assert registry.drain_new()[0].created_tick == 17


def test_different_kind_or_position_is_a_new_directive():
    registry = DirectiveRegistry()

    registry.create_if_absent(Position("W15N5", 25, 25), "colonize")
    registry.create_if_absent(Position("W15N5", 10, 10), "colonize")
    registry.create_if_absent(Position("W15N5", 25, 25), "incubate")

    assert len(registry) == 3
    assert ("incubate", Position("W15N5", 25, 25)) in registry
    assert ("colonize", Position("W15N5", 10, 10)) in registry


def test_seeded_directives_are_not_published_again():
    existing = Directive(kind="colonize", position=Position("E9S9"))
    registry = DirectiveRegistry([existing])

    assert registry.create_if_absent(Position("E9S9"), "colonize") is False
    assert registry.drain_new() == []


def test_drain_returns_new_directives_once():
    registry = DirectiveRegistry()
    registry.create_if_absent(Position("W15N5"), "colonize")

    first = registry.drain_new()

    assert [d.position.site_id for d in first] == ["W15N5"]
    assert registry.drain_new() == []


def test_console_notifier_tags_alerts(capsys):
    ConsoleNotifier().notify(NotifyLevel.INFO, "quiet")
    ConsoleNotifier("strategist-test").notify(NotifyLevel.ALERT, "loud")

    out = capsys.readouterr().out.splitlines()
    assert out == ["[strategist] quiet", "[strategist-test] ALERT: loud"]


def test_buffered_notifier_keeps_tick(capsys):
    notifier = BufferedNotifier()
    notifier.current_tick = 2017
    notifier.notify(NotifyLevel.INFO, "picked W15N5")

    notes = notifier.drain()

    assert [(n.level, n.message, n.tick) for n in notes] == [
        (NotifyLevel.INFO, "picked W15N5", 2017)
    ]
    assert notifier.drain() == []
    assert "[strategist] picked W15N5" in capsys.readouterr().out
