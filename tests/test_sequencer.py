import calendar
from usbthermo.actions import Action, ResolvedAction
from usbthermo.config import ParsedOptions
from usbthermo.sequencer import AcquisitionSequencer

EPOCH = calendar.timegm((2024, 1, 1, 0, 0, 0))

def build(driver, capture, waits=None, **opts):
    handle = driver.open("/dev/null")
    waits = waits if waits is not None else []
    return AcquisitionSequencer(driver, handle, ParsedOptions(**opts), verbose=opts.get("verbose", True),
                                wait=lambda: waits.append(driver.calls[-1]), clock=lambda: EPOCH,
                                out=capture.o, err=capture.e)

def test_acquire_order_and_json(driver, capture):
    waits = []
    seq = build(driver, capture, waits, output='json', time_style='iso', verbose=False)
    assert seq.run(ResolvedAction(Action.ACQUIRE_TEMP)) == 0
    assert driver.calls == ["open", "measure", "acquire"]
    assert waits == ["measure"]
    assert capture.out == ['{ "time": "2024-01-01T00:00:00Z", "temp_c": 21.50 }']

def test_acquire_fahrenheit_verbose(driver, capture):
    driver.reading = 100.0
    seq = build(driver, capture, units='F', time_style='iso')
    assert seq.run(ResolvedAction(Action.ACQUIRE_TEMP)) == 0
    assert capture.out == ["Waiting for response ...", "2024-01-01T00:00:00Z Sensor F: 212.00"]
    assert seq.s.reading_c == 100.0

def test_measure_failure_skips_wait(driver, capture):
    driver.fail_at = "measure"
    waits = []
    seq = build(driver, capture, waits)
    assert seq.run(ResolvedAction(Action.ACQUIRE_TEMP)) == 1
    assert waits == [] and capture.err == ["measure failed"]
    assert "acquire" not in driver.calls

def test_acquire_failure(driver, capture):
    driver.fail_at = "acquire"
    assert build(driver, capture).run(ResolvedAction(Action.ACQUIRE_TEMP)) == 1
    assert capture.err == ["acquire failed"]

def test_rom_upper(driver, capture):
    seq = build(driver, capture, hex_case='upper')
    assert seq.run(ResolvedAction(Action.READ_ROM)) == 0
    assert capture.out == ["ROM: 280AFF3C91160400"]

def test_precision_in_range_passes_through(driver, capture):
    for bits in (9, 10, 11, 12):
        assert build(driver, capture).run(ResolvedAction(Action.SET_PRECISION, bits)) == 0
    assert driver.calls.count("set_precision") == 4

def test_precision_out_of_range_no_driver_call(driver, capture):
    for bits in (8, 13):
        assert build(driver, capture).run(ResolvedAction(Action.SET_PRECISION, bits)) == 1
    assert "set_precision" not in driver.calls
    assert capture.err == ["Probe precision out of range!"] * 2

def test_precision_out_of_range_quiet(driver, capture):
    assert build(driver, capture, verbose=False).run(ResolvedAction(Action.SET_PRECISION, 4)) == 1
    assert capture.err == []

def test_precision_return_code_verbatim(driver, capture):
    driver.precision_rv = 3
    assert build(driver, capture).run(ResolvedAction(Action.SET_PRECISION, 11)) == 3
