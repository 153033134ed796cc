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

import logging
import pytest

from ccprog.core.options_manager import OptionsManager
from ccprog.core.options import OPTIONS_INFO

@pytest.fixture(scope='function')
def mgr():
    return OptionsManager()

@pytest.fixture(scope='function')
def layer1():
    return {
            'foo': 1,
            'bar': 2,
            'baz': 3,
            'timeout.retries': 20,
        }

@pytest.fixture(scope='function')
def layer2():
    return {
            'baz': 33,
            'dogcow': 777,
        }

class TestOptionsManager(object):
    def test_defaults(self, mgr):
        assert mgr.get('timeout.retries') == OPTIONS_INFO['timeout.retries'].default == 1000
        assert mgr['gpio.backend'] == 'sysfs'
        assert 'timeout.retries' not in mgr
        assert mgr.get_default('debug.config') == 0x22
        assert mgr.get_default('unknown_option') is None

    def test_a(self, mgr, layer1):
        mgr.add_front(layer1)
        assert 'timeout.retries' in mgr
        assert mgr.get('timeout.retries') == 20

    def test_b(self, mgr, layer1):
        mgr.add_front(layer1)
        mgr.add_front({'timeout.retries': 5})
        assert mgr.get('timeout.retries') == 5

    def test_c(self, mgr, layer1):
        mgr.add_front(layer1)
        mgr.add_back({'timeout.retries': 5})
        assert mgr.get('timeout.retries') == 20

    def test_none_value(self, mgr):
        mgr.add_back({'reset.active_high': None})
        assert 'reset.active_high' not in mgr
        assert mgr.get('reset.active_high') == True

    def test_none_layer(self, mgr):
        mgr.add_back(None)
        assert mgr.get('gpio.clock') == 1

    def test_convert_double_underscore(self, mgr):
        mgr.add_back({'debug__traceback': True})
        assert 'debug.traceback' in mgr
        assert mgr.get('debug.traceback') == True

    def test_lowercase(self, mgr):
        mgr.add_back({'GPIO.Data': 7})
        assert mgr.get('gpio.data') == 7

    def test_set(self, mgr, layer1):
        mgr.add_front(layer1)
        mgr.set('buzz', 1234)
        assert mgr['buzz'] == 1234
        mgr.add_front({'buzz': 4321})
        assert mgr.get('buzz') == 4321

    def test_set_empty(self, mgr):
        mgr['gpio.reset'] = 12
        assert mgr.get('gpio.reset') == 12

    def test_update(self, mgr, layer1, layer2):
        mgr.add_front(layer1)
        mgr.add_front(layer2)
        mgr.update({'foo': 888, 'debug__traceback': False})
        assert mgr['foo'] == 888
        assert mgr.get('debug.traceback') == False

    def test_type_warning(self, mgr, caplog):
        with caplog.at_level(logging.WARNING):
            mgr.add_back({'timeout.retries': "many"})
        assert "unexpected type" in caplog.text
        # The value is still stored.
        assert mgr.get('timeout.retries') == "many"

    def test_int_for_float(self, mgr, caplog):
        with caplog.at_level(logging.WARNING):
            mgr.add_back({'erase.poll_interval': 0})
        assert caplog.text == ""
