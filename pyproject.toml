[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "missilesim"
version = "0.1.0"
description = "Networked missile and target engagement simulator with launcher, launch-control and radar components"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "simulation",
    "missile",
    "radar",
    "launcher",
    "udp",
    "serial",
    "ini",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
missilesim-simulator = "missilesim.simulator:main"
missilesim-missile-command = "missilesim.sim_clients:missile_command_main"
missilesim-target-command = "missilesim.sim_clients:target_command_main"
missilesim-simulation-client = "missilesim.sim_clients:simulation_main"
missilesim-radar-server = "missilesim.lc_net:dummy_radar_server_main"
missilesim-lc = "missilesim.lc_main:main"
missilesim-launcher = "missilesim.uart_server:main"
missilesim-launcher-control = "missilesim.launcher_control:main"
missilesim-missile-monitor = "missilesim.missile_monitor:main"
missilesim-mfr-sim = "missilesim.mfr_sim:main"
missilesim-mfr-server = "missilesim.mfr_server:main"

[tool.hatch.build.targets.wheel]
packages = ["missilesim"]

[tool.hatch.build.targets.sdist]
include = ["missilesim", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
