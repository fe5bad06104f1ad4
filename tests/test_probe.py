import pytest
from usbthermo.errors import ProbeError
from usbthermo.probe import MockProbe, RomId, crc8

def test_rom_fixed_length():
    with pytest.raises(ValueError):
        RomId(b"\x28\x00")

def test_crc8_known_rom():
    # worked example from Maxim application note 27
    body = bytes([0x02, 0x1C, 0xB8, 0x01, 0x00, 0x00, 0x00])
    assert crc8(body) == 0xA2

def test_mock_rom_valid():
    p = MockProbe(); h = p.open("/dev/ttyUSB0")
    rom = p.rom(h)
    assert rom.family == 0x28 and rom.crc_ok and len(rom) == 8

def test_mock_precision_quantizes():
    p = MockProbe(start_c=20.3); h = p.open("x")
    assert p.set_precision(h, 9) == 0
    p.measure(h)
    assert p.acquire(h) % 0.5 == 0

def test_mock_acquire_without_measure():
    p = MockProbe(); h = p.open("x")
    with pytest.raises(ProbeError):
        p.acquire(h)
    assert p.errmsg() == "No conversion in progress"

def test_mock_closed_handle():
    p = MockProbe(); h = p.open("x"); p.close(h)
    with pytest.raises(ProbeError):
        p.measure(h)
