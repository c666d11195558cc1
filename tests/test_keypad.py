import pytest

from chip8vm.keypad import Keypad


def test_press_and_release():
    keypad = Keypad()
    keypad.press(0xA)
    assert keypad.is_pressed(0xA)
    assert keypad.first_pressed() == 0xA

    keypad.release(0xA)
    assert not keypad.is_pressed(0xA)
    assert keypad.first_pressed() is None


def test_first_pressed_is_lowest_key():
    keypad = Keypad()
    keypad.press(0xC)
    keypad.press(0x3)
    assert keypad.first_pressed() == 0x3


def test_keys_persist_until_released():
    keypad = Keypad()
    keypad.press(5)
    assert keypad.is_pressed(5)
    assert keypad.is_pressed(5)
    keypad.clear()
    assert keypad.first_pressed() is None


@pytest.mark.parametrize("key", [-1, 16, 0xFF])
def test_out_of_range_keys(key):
    keypad = Keypad()
    with pytest.raises(ValueError):
        keypad.press(key)
    with pytest.raises(ValueError):
        keypad.release(key)
    assert keypad.is_pressed(key) is False
