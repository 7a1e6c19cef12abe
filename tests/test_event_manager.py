from session.event_manager import EventManager


def test_callbacks_run_in_priority_order():
    manager = EventManager()
    calls = []
    manager.register_hook('frame_received', lambda: calls.append('low'), priority=0)
    manager.register_hook('frame_received', lambda: calls.append('high'), priority=10)
    manager.register_hook('frame_received', lambda: calls.append('low-2'), priority=0)

    manager.trigger_event('frame_received')

    assert calls == ['high', 'low', 'low-2']


def test_trigger_returns_results_and_none_for_failures(capsys):
    manager = EventManager()

    def broken(value):
        raise RuntimeError("boom")

    manager.register_hook('motion_event', lambda value: value * 2, priority=1)
    manager.register_hook('motion_event', broken)

    assert manager.trigger_event('motion_event', 21) == [42, None]
    assert "Error in event callback for 'motion_event': boom" in capsys.readouterr().out


def test_unknown_event_triggers_nothing():
    manager = EventManager()

    assert manager.trigger_event('missing') == []
    assert not manager.has_listeners('missing')
    assert manager.get_event_names() == []


def test_unregister_hook():
    manager = EventManager()

    def callback():
        return 'called'

    manager.register_hook('setup', callback)
    assert manager.unregister_hook('setup', callback)
    assert not manager.unregister_hook('setup', callback)
    assert not manager.unregister_hook('cleanup', callback)
    assert manager.trigger_event('setup') == []


def test_trigger_forwards_positional_and_keyword_arguments():
    manager = EventManager()
    received = []
    manager.register_hook('frame_analyzed', lambda result, timestamp: received.append((result, timestamp)))

    manager.trigger_event('frame_analyzed', 'result', timestamp=1.5)

    assert received == [('result', 1.5)]


def test_clear_event_and_clear_all():
    manager = EventManager()
    manager.register_hook('setup', lambda: None)
    manager.register_hook('cleanup', lambda: None)

    manager.clear_event('setup')
    assert manager.get_event_names() == ['cleanup']

    manager.clear_all()
    assert manager.get_event_names() == []
