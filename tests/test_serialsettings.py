import warnings

import pytest

from comtool.serialsettings import (
    BaudRate,
    DataBits,
    DirtyFlag,
    FlowControl,
    Parity,
    PortabilityWarning,
    PortSettings,
    SerialSettingsWarning,
    SettingsBook,
    StopBits,
)


def _quiet_book(platform="posix"):
    book = SettingsBook(platform=platform)
    book.clear_dirty()
    return book


def test_defaults():
    book = SettingsBook(platform="posix")
    assert book.settings == PortSettings()
    assert book.settings.baud_rate == BaudRate.BAUD9600
    assert book.settings.data_bits is DataBits.DATA_8
    assert book.settings.parity is Parity.NONE
    assert book.settings.stop_bits is StopBits.STOP_1
    assert book.settings.flow_control is FlowControl.OFF
    assert book.settings.timeout_millisec == 10
    assert book.dirty == DirtyFlag.ALL


def test_unknown_platform_rejected():
    with pytest.raises(ValueError):
        SettingsBook(platform="amiga")


def test_common_baud_rate_no_warning():
    book = _quiet_book()
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        book.set_baud_rate(115200)
    assert book.settings.baud_rate == BaudRate.BAUD115200
    assert book.dirty == DirtyFlag.BAUD_RATE


def test_posix_only_rate_on_posix_warns_and_sets():
    book = _quiet_book()
    with pytest.warns(PortabilityWarning):
        book.set_baud_rate(BaudRate.BAUD1800)
    assert book.settings.baud_rate == BaudRate.BAUD1800


def test_windows_only_rate_refused_on_posix():
    book = _quiet_book()
    with pytest.warns(SerialSettingsWarning) as record:
        book.set_baud_rate(BaudRate.BAUD14400)
    assert not any(issubclass(w.category, PortabilityWarning) for w in record)
    assert book.settings.baud_rate == BaudRate.BAUD9600
    assert not book.dirty


def test_windows_only_rate_on_windows_warns_and_sets():
    book = _quiet_book("windows")
    with pytest.warns(PortabilityWarning):
        book.set_baud_rate(BaudRate.BAUD14400)
    assert book.settings.baud_rate == BaudRate.BAUD14400


def test_odd_rate_accepted_on_mac_refused_on_posix():
    mac = _quiet_book("mac")
    mac.set_baud_rate(31250)
    assert mac.settings.baud_rate == 31250
    posix = _quiet_book()
    with pytest.warns(SerialSettingsWarning):
        posix.set_baud_rate(31250)
    assert posix.settings.baud_rate == BaudRate.BAUD9600


def test_five_data_bits_refused_with_two_stop_bits():
    book = _quiet_book()
    book.set_stop_bits(StopBits.STOP_2)
    with pytest.warns(SerialSettingsWarning):
        book.set_data_bits(DataBits.DATA_5)
    assert book.settings.data_bits is DataBits.DATA_8


def test_two_stop_bits_refused_with_five_data_bits():
    book = _quiet_book()
    book.set_data_bits(5)
    with pytest.warns(SerialSettingsWarning):
        book.set_stop_bits(StopBits.STOP_2)
    assert book.settings.stop_bits is StopBits.STOP_1
    assert book.settings.data_bits is DataBits.DATA_5


def test_one_and_half_stop_bits_refused_on_posix():
    book = _quiet_book()
    book.set_data_bits(DataBits.DATA_5)
    with pytest.warns(SerialSettingsWarning):
        book.set_stop_bits(StopBits.STOP_1_5)
    assert book.settings.stop_bits is StopBits.STOP_1


def test_one_and_half_stop_bits_on_windows():
    book = _quiet_book("windows")
    with pytest.warns(SerialSettingsWarning):
        book.set_stop_bits(StopBits.STOP_1_5)
    assert book.settings.stop_bits is StopBits.STOP_1
    book.set_data_bits(DataBits.DATA_5)
    with pytest.warns(PortabilityWarning):
        book.set_stop_bits(StopBits.STOP_1_5)
    assert book.settings.stop_bits is StopBits.STOP_1_5
    with pytest.warns(SerialSettingsWarning):
        book.set_data_bits(DataBits.DATA_8)
    assert book.settings.data_bits is DataBits.DATA_5


def test_space_parity_with_eight_bits_warns_but_sets():
    book = _quiet_book()
    with pytest.warns(SerialSettingsWarning):
        book.set_parity(Parity.SPACE)
    assert book.settings.parity is Parity.SPACE
    assert book.dirty == DirtyFlag.PARITY


def test_mark_parity_on_posix_warns_but_sets():
    book = _quiet_book()
    with pytest.warns(SerialSettingsWarning):
        book.set_parity(Parity.MARK)
    assert book.settings.parity is Parity.MARK


def test_flow_and_timeout_mark_dirty():
    book = _quiet_book()
    book.set_flow_control(FlowControl.XONXOFF)
    book.set_timeout(-1)
    assert book.settings.flow_control is FlowControl.XONXOFF
    assert book.settings.timeout_millisec == -1
    assert book.dirty == DirtyFlag.FLOW | DirtyFlag.TIMEOUT


def test_invalid_data_bits_raise():
    book = _quiet_book()
    with pytest.raises(ValueError):
        book.set_data_bits(9)


def test_updater_receives_changes_and_clears_dirty():
    calls = []
    book = _quiet_book()
    book.updater = lambda settings, dirty: calls.append((settings, dirty))
    book.set_parity(Parity.EVEN)
    assert len(calls) == 1
    settings, dirty = calls[0]
    assert settings.parity is Parity.EVEN
    assert dirty == DirtyFlag.PARITY
    assert not book.dirty


def test_updater_not_called_when_change_refused():
    calls = []
    book = _quiet_book()
    book.set_stop_bits(StopBits.STOP_2)
    book.updater = lambda settings, dirty: calls.append(dirty)
    with pytest.warns(SerialSettingsWarning):
        book.set_data_bits(DataBits.DATA_5)
    assert calls == []


def test_set_port_settings_marks_all_and_updates_once():
    calls = []
    book = _quiet_book()
    book.updater = lambda settings, dirty: calls.append((settings, dirty))
    wanted = PortSettings(baud_rate=BaudRate.BAUD115200, data_bits=DataBits.DATA_7,
                          parity=Parity.ODD, stop_bits=StopBits.STOP_2,
                          flow_control=FlowControl.HARDWARE, timeout_millisec=500)
    book.set_port_settings(wanted)
    assert book.settings == wanted
    assert len(calls) == 1
    assert calls[0] == (wanted, DirtyFlag.ALL)


def test_set_port_settings_keeps_order_of_checks():
    book = _quiet_book()
    with pytest.warns(SerialSettingsWarning):
        book.set_port_settings(PortSettings(data_bits=DataBits.DATA_5,
                                            stop_bits=StopBits.STOP_2))
    assert book.settings.data_bits is DataBits.DATA_5
    assert book.settings.stop_bits is StopBits.STOP_1
    assert book.dirty == DirtyFlag.ALL


def test_constructor_with_settings():
    wanted = PortSettings(baud_rate=BaudRate.BAUD57600, parity=Parity.EVEN)
    book = SettingsBook(wanted, platform="posix")
    assert book.settings == wanted
    assert book.settings is not wanted
    assert book.dirty == DirtyFlag.ALL