# ccprog CC2530 flash programmer
# Copyright (c) 2026 The ccprog authors
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from typing import (Any, Dict, List, NamedTuple, Tuple, Union)

class OptionInfo(NamedTuple):
    name: str
    type: Union[type, Tuple[type, ...]]
    default: Any
    help: str

## @brief Definitions of the builtin options.
BUILTIN_OPTIONS = [
    OptionInfo('config_file', str, None,
        "Path to custom config file."),
    OptionInfo('connect.retries', int, 3,
        "Number of attempts for enabling DMA in the debug configuration and for identifying the chip. "
        "Default is 3."),
    OptionInfo('debug.config', int, 0x22,
        "Debug configuration byte written with WRITE_CONFIG before programming. The default 0x22 enables "
        "DMA while the CPU is halted."),
    OptionInfo('debug.traceback', bool, False,
        "Print tracebacks for exceptions."),
    OptionInfo('erase.poll_interval', float, 0.00001,
        "Time in seconds to sleep between chip erase status polls."),
    OptionInfo('gpio.backend', str, 'sysfs',
        "Name of the GPIO backend used to drive the reset, clock and data lines."),
    OptionInfo('gpio.clock', int, 1,
        "GPIO number of the debug clock line."),
    OptionInfo('gpio.data', int, 2,
        "GPIO number of the debug data line."),
    OptionInfo('gpio.reset', int, 0,
        "GPIO number of the reset line."),
    OptionInfo('gpio.sysfs_root', str, '/sys/class/gpio',
        "Root directory of the sysfs GPIO interface."),
    OptionInfo('no_config', bool, False,
        "Do not use default config file."),
    OptionInfo('project_dir', str, None,
        "Path to the session's project directory. Defaults to the working directory when the tool was "
        "launched."),
    OptionInfo('reset.active_high', bool, True,
        "Level driven on the reset GPIO while reset is asserted. The default suits boards with an "
        "inverting buffer on the active low reset input."),
    OptionInfo('timeout.retries', int, 1000,
        "Iteration budget of every busy wait: readiness polls, flash busy polls, erase polls and "
        "clock switch polls. Default is 1000."),
    ]

## @brief The runtime dictionary of options.
OPTIONS_INFO: Dict[str, OptionInfo] = {}

def add_option_set(options: List[OptionInfo]) -> None:
    """@brief Merge a list of OptionInfo objects into OPTIONS_INFO."""
    OPTIONS_INFO.update({oi.name: oi for oi in options})

# Start with only builtin options.
add_option_set(BUILTIN_OPTIONS)
