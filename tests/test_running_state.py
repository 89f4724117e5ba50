from lowtime.running import is_running


def test_active_signal_alone_means_running():
    assert is_running(True, 40.0, None)
    assert is_running(True, 40.0, 39.0)


def test_decreasing_value_means_running_without_signal():
    assert is_running(False, 39.5, 40.0)


def test_no_signal_and_no_decrease_is_not_running():
    assert not is_running(False, 40.0, None)
    assert not is_running(False, 40.0, 40.0)
    assert not is_running(False, 41.0, 40.0)
