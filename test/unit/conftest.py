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

import pytest

from ccprog.core.session import Session
from ccprog.port.bit_transport import BitTransport
from ccprog.port.protocol import CommandProtocol
from ccprog.target.memory import XdataMemory

from .mocktarget import (DEFAULT_PINS, SimulatedTarget)

@pytest.fixture(scope='function')
def target():
    return SimulatedTarget()

@pytest.fixture(scope='function')
def session(target):
    with Session(gpio=target, no_config=True, timeout__retries=50, erase__poll_interval=0) as s:
        yield s

@pytest.fixture(scope='function')
def active_target(target):
    """@brief Simulated target already in debug mode, without a session."""
    for pin in DEFAULT_PINS:
        target.export(pin)
    target.set_value(DEFAULT_PINS.reset, True)
    for _ in range(2):
        target.set_value(DEFAULT_PINS.clock, False)
        target.set_value(DEFAULT_PINS.clock, True)
    target.set_value(DEFAULT_PINS.clock, False)
    target.set_value(DEFAULT_PINS.reset, False)
    assert target.in_debug
    return target

@pytest.fixture(scope='function')
def protocol(active_target):
    return CommandProtocol(BitTransport(active_target, DEFAULT_PINS), retries=50)

@pytest.fixture(scope='function')
def memory(protocol):
    return XdataMemory(protocol)
