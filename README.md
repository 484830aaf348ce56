# balboaspa

A small library for talking to a Balboa spa controller over its RS-485
bus. It frames and checks telegrams, registers as a client on the bus,
decodes status, configuration, fault-log and filter-cycle messages, and
keeps a smoothed view of the spa's state. Thermostat, sensor and switch
entities follow that state and send commands back to the spa.

The package has no dependencies outside the standard library.

## Install

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `balboaspa.protocol`: `crc8` (CRC-8, polynomial 0x07, init and final
  xor 0x02), `build_frame` (adds length byte, checksum and the 0x7E
  start/end markers; raises `ValueError` for payloads too long for a
  35-byte frame), `FrameReader` (its `feed` method takes one byte and
  returns a complete frame as `bytes`, or `None`), the `MessageType` enum,
  and the decoders `decode_config`, `decode_fault` and
  `decode_filter_settings`, which raise `ValueError` for frames that are
  too short.
- `balboaspa.types`: the dataclasses `SpaConfig`, `SpaFaultLog` and
  `SpaFilterSettings` (with `filter1_payload()` and `filter2_payload()`
  giving `{"start":"HH:MM","duration":"HH:MM"}` strings), and
  `fault_message(code)`, which maps a fault code to its description or
  `"Unknown error"`.
- `balboaspa.state`: `ValueHistory`, which keeps the last 20 readings and
  reports their most frequent value, and `SpaState`. `SpaState` holds the
  jet, blower, light, high-range, circulation and clock fields. Its
  `current_temp()` and `target_temp()` return 0 until more than five
  readings exist. `heat_state()` and `rest_mode()` return `NO_VALUE` (254)
  until then. `last_heat_state()` and `last_rest_mode()` return the most
  recent reading, or `NO_VALUE`.
- `balboaspa.spa`: `BalboaSpa`, the bus client.
- `balboaspa.thermostat`: `BalboaSpaThermostat`, with `ClimateMode`,
  `ClimateAction` and `ClimateTraits`.
- `balboaspa.sensors`: `BalboaSpaSensor` and `SensorType` (`BLOWER`,
  `HIGHRANGE`, `CIRCULATION`, `RESTMODE`, `HEATSTATE`).
- `balboaspa.switches`: `SpaSwitch` and its subclasses `BlowerSwitch`,
  `Jet1Switch`, `Jet2Switch`, `Jet3Switch` and `LightsSwitch`.

## Usage

`BalboaSpa` is given a port object. The port needs an `in_waiting`
attribute, plus `read(size)`, `write(data)` and `flush()` methods. An
open serial port from a serial library has this shape. `update()` reads
every waiting byte, processes it, and then calls each registered listener
with the `SpaState`. Bytes can also be passed in directly with
`feed_byte(byte)`.

```python
from balboaspa.spa import BalboaSpa
from balboaspa.thermostat import BalboaSpaThermostat
from balboaspa.sensors import BalboaSpaSensor, SensorType
from balboaspa.switches import LightsSwitch

spa = BalboaSpa(port)  # any object with in_waiting, read, write and flush

thermostat = BalboaSpaThermostat()
thermostat.set_parent(spa)
thermostat.add_on_state_callback(lambda t: print(t.mode, t.current_temperature))

heater = BalboaSpaSensor(SensorType.HEATSTATE)
heater.set_parent(spa)
heater.add_on_state_callback(lambda value: print("heat state", value))

light = LightsSwitch()
light.set_parent(spa)

while True:
    spa.update()
```

On start the client waits for the controller to offer a client id. It
acknowledges the id it is given, which is capped at 0x2F. After that it
asks in turn for the configuration, the fault log and the filter cycles.
Those results are available from `spa.config()`, `spa.fault_log` and
`spa.filter_settings`. `spa.client_id` is 0 until registration is done.

A command is queued and goes out in reply to the controller's next
clear-to-send message. Only the latest queued command is sent.

```python
spa.set_temp(38.0)       # converted to the controller's raw unit
spa.set_hour(7)
spa.toggle_jet1()
light.write_state(True)  # toggles only if the light is not already on
thermostat.control(37.5)
```

`write_state` and `control` raise `RuntimeError` when the entity has no
spa attached.

The framing helpers also work on their own:

```python
from balboaspa.protocol import FrameReader, build_frame

frame = build_frame(bytes([0x10, 0xBF, 0x07]))
reader = FrameReader()
for byte in frame:
    complete = reader.feed(byte)
```

## What it does not do

The package provides no command-line program. It does not open serial
ports itself; you supply the port object. It does not publish entities to
a home-automation server or message broker. Entity changes reach your
code only through the callbacks you register.