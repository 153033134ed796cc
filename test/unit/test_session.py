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
from unittest.mock import Mock

from ccprog.core import exceptions
from ccprog.core.session import Session
from ccprog.gpio.pins import (Direction, GPIO_BACKENDS, PinSet)
from ccprog.port import commands

from .mocktarget import SimulatedTarget

class TestSession:
    def test_open_close(self, target):
        with Session(gpio=target, no_config=True) as session:
            assert session.is_open
            assert session.debug.is_active
            assert target.exported == {0, 1, 2}
            assert target.in_debug
        assert not session.is_open
        assert not target.in_debug
        assert target.exported == set()
        assert all(d is Direction.IN for d in target.directions.values())

    def test_execute_in_session(self, session):
        assert session.protocol.execute(commands.GET_CHIP_ID)[0] == 0xa5

    def test_pins_from_options(self):
        target = SimulatedTarget(pins=PinSet(reset=5, clock=6, data=7))
        with Session(gpio=target, no_config=True, gpio__reset=5, gpio__clock=6, gpio__data=7) as session:
            assert session.pins == PinSet(5, 6, 7)
            assert target.in_debug
            assert session.protocol.execute(commands.GET_CHIP_ID)[0] == 0xa5

    def test_options_priority(self, tmp_path):
        (tmp_path / "ccprog.yaml").write_text("timeout.retries: 7\ngpio.clock: 9\nconnect.retries: 2\n")
        session = Session(gpio=None, auto_open=False, project_dir=str(tmp_path),
                options={'gpio.clock': 10}, option_defaults={'connect.retries': 1, 'gpio.data': 11},
                **{'timeout.retries': 8})
        assert session.options.get('timeout.retries') == 8
        assert session.options.get('gpio.clock') == 10
        assert session.options.get('connect.retries') == 2
        assert session.options.get('gpio.data') == 11

    def test_no_config(self, tmp_path):
        (tmp_path / "ccprog.yaml").write_text("timeout.retries: 7\n")
        session = Session(auto_open=False, project_dir=str(tmp_path), no_config=True)
        assert session.options.get('timeout.retries') == 1000

    def test_explicit_config_file(self, tmp_path):
        (tmp_path / "other.yml").write_text("gpio.backend: custom\n")
        session = Session(auto_open=False, project_dir=str(tmp_path), config_file="other.yml")
        assert session.options.get('gpio.backend') == "custom"

    def test_bad_config(self, tmp_path):
        (tmp_path / "ccprog.yaml").write_text("- a\n- b\n")
        with pytest.raises(exceptions.Error):
            Session(auto_open=False, project_dir=str(tmp_path))

    def test_project_dir_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv('CCPROG_PROJECT_DIR', str(tmp_path))
        assert Session(auto_open=False, no_config=True).project_dir == str(tmp_path)

    def test_get_current(self, target):
        session = Session(gpio=target, auto_open=False, no_config=True)
        assert Session.get_current() is session

    def test_backend_from_options(self, monkeypatch):
        target = SimulatedTarget()
        backend = Mock(return_value=target)
        backend.from_options.return_value = target
        monkeypatch.setitem(GPIO_BACKENDS, 'sim', backend)
        with Session(no_config=True, gpio__backend='sim') as session:
            assert session.gpio is target
            assert target.in_debug

    def test_unknown_backend(self):
        with pytest.raises(exceptions.Error):
            with Session(no_config=True, gpio__backend='nonexistent'):
                pass

    def test_close_releases_pins_after_error(self, target):
        with pytest.raises(exceptions.TimeoutError):
            with Session(gpio=target, no_config=True, timeout__retries=3) as session:
                target.ready_delay = None
                session.protocol.execute(commands.HALT)
        assert not target.in_debug
        assert target.unexported == [0, 1, 2]

    def test_close_continues_after_gpio_error(self, target, monkeypatch):
        session = Session(gpio=target, no_config=True)
        session.open()
        def fail(pin, direction):
            raise exceptions.GpioError("direction write failed", pin=pin)
        monkeypatch.setattr(target, "set_direction", fail)
        session.close()
        assert not session.is_open
        assert target.unexported == [0, 1, 2]
        assert target.resets == 1

    def test_open_failure_closes(self, target, monkeypatch):
        def fail(pin, value):
            raise exceptions.GpioError("value write failed", pin=pin)
        monkeypatch.setattr(target, "set_value", fail)
        with pytest.raises(exceptions.GpioError):
            with Session(gpio=target, no_config=True):
                pass
        assert target.unexported == [0, 1, 2]
