# missilesim

A family of cooperating console programs that simulate an air-defence
engagement over the network: a 2-D simulator where missiles chase targets,
a launcher that fires missiles on command, a launch controller, and a
multi-function radar pair that exchanges position tracks over UDP.

Everything is plain Python with no third-party runtime dependencies. The
serial-line programs use `termios` and so need a POSIX system.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## The engagement simulator

```
missilesim-simulator [--port 9000]
```

listens for UDP datagrams. Every datagram starts with a one-byte type tag
from `missilesim.datatypes.DataType` (`MISSILE = 0x01`, `TARGET = 0x02`)
followed by a `MissileInfo` or `TargetInfo` record; anything else is logged
and ignored. Each received entity moves in its own thread every 0.1 s at its
speed and heading; once it leaves the 5000 × 5000 map it raises
`EntityOutOfBounds` and stops moving. Once a second the collision pass
(`Simulation.resolve_collisions`) removes every missile together with the
targets that are within 100 units of it on both axes. Progress is written
to the log at INFO level. Stop it with Ctrl-C.

Commands can be sent to a running simulator with:

```
missilesim-target-command [--name NAME]   # one target moving north; asks for a name if none is given
missilesim-missile-command                # one missile aimed at where the demo target will be
missilesim-simulation-client              # a stationary target "alpha" and a missile aimed at it
```

All three take `--host` (default `127.0.0.1`) and `--port` (default `9000`).

The same records can be built and decoded in code:

```python
from missilesim.datatypes import MissileInfo, decode_message

payload = MissileInfo(missile_id=1, ls_pos_x=10.5, ls_pos_y=20.5,
                      speed=300, degree=45.0).serialize()
info = decode_message(payload)
```

`TargetInfo` names must be shorter than 20 bytes of UTF-8. A
`SerializerRegistry` maps type names to factories that build objects from
bytes.

`missilesim.entities` holds the `Missile` and `Target` models and
`missilesim.simulator.Simulation` the message handling (`handle_message`),
movement (`step_entity`) and collisions, so the simulation can also be
driven without sockets. `missilesim.udp_server.UDPServer` is the datagram
server it runs on.

## The launcher

```
missilesim-launcher [--config ../common/launcher_config.ini] [--port /dev/pts/8]
```

loads the `[LAUNCHER]` section of the INI file (`ID`, `X`, `Y`,
`MISSILE_COUNT`, a comma-separated `MISSILE_IDS` and an optional `MODE` of
`ENGAGEMENT`, `MOVEMENT` or `STOP`; see
`missilesim.launcher_state.load_launcher_config`). Positions are integers in
units of 1e-8 degree. It then reads fixed-size `LauncherMessage` commands
from the serial device:

* **launch** – sends a `MissileInfo` at speed 1000 from the launcher's
  position to the simulator at 127.0.0.1:9000 over UDP;
* **move** – drives the launcher towards a new position at 50 km/h in 0.1 s
  steps, sending its status after every step; a new move interrupts the
  running one, and the mode returns to `STOP` on arrival;
* **mode change** – sets a new operation mode;
* **status request** – sends the current status.

Launch and mode-change commands are refused while the mode is `MOVEMENT`.
Each status change is written back to the same device as a
`LauncherStatusMessage`, which carries at most ten missile identifiers.

```
missilesim-launcher-control [--port /dev/pts/7]
```

is the interactive counterpart: a menu for the four commands (mode change
offers only `ENGAGEMENT` and `MOVEMENT`), which it writes to the serial
device, while a background thread prints every status report received.

```
missilesim-missile-monitor [--port 9000] [--count N]
```

prints every missile launch record received over UDP, useful to check the
launcher without running the simulator.

## The launch controller

```
missilesim-lc
```

appends timestamped lines to a log file (`--log-file`, default
`lc_log.txt`), connects to the radar (`--radar-host 127.0.0.1`,
`--radar-port 5001`), tries the launcher serial device (`--serial-device
/dev/ttyUSB0`, `--baudrate 9600`) and carries on if it is absent, waits for
one connection on `--ecc-port 5000`, and then reads commands from the
console. `TURN_LEFT` and `TURN_RIGHT` log a radar heading of 80 or 100
degrees; other commands are logged as unknown. The building blocks are
`LcClient` and `LcServer` in `missilesim.lc_net`, `LcSerial` in
`missilesim.lc_serial` and `LcLogger` in `missilesim.lc_logger`.

```
missilesim-radar-server [--port 5001] [--hold SECONDS]
```

is a stand-in radar that accepts a single TCP connection and keeps it open.

## The multi-function radar pair

```
missilesim-mfr-server [--port 8888]
missilesim-mfr-sim [--config config.ini] [--host 127.0.0.1] [--port 8888]
                   [--interval 1.0] [--count N] [--seed N]
```

The server prints every datagram that is exactly one
`missilesim.mfr_packet.Message` (a target track and a missile track) and
ignores others. The simulator reads the `[Target]` keys `targetId`,
`latitude`, `longitude`, `altitude` and the `[Missile]` keys `missileId`,
`speed`, `heading`, `distanceToTarget`, `latitude`, `longitude`, `altitude`,
then on each tick (`missilesim.mfr_sim.step`) jitters the target, measures
heading and distance with `missilesim.mfr_algorithm`, steers the missile
towards the target and sends the message.

## Configuration files

`missilesim.ini_parser.IniParser` reads the INI files: `[section]` headers,
`key = value` lines, and comments starting with `;` or `#`. Keys before any
header belong to the section `""`. A line that is neither raises
`IniError`, as does asking `get_section` for a section that does not exist.

## What it does not do

* The launch controller does not act on what it receives: it does not read
  radar data, forward console commands to the launcher, or read commands
  from the connection it accepts.
* The simulator keeps no record of a run and has no display; entities that
  leave the map stop moving but are not removed from its entity list.
* Nothing here talks to real hardware beyond opening the serial devices it
  is given.