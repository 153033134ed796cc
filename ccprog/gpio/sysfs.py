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

import errno
import logging
import os

from .pins import (Direction, GpioPins, GPIO_BACKENDS)
from ..core import exceptions

LOG = logging.getLogger(__name__)

class SysfsGpio(GpioPins):
    """@brief GPIO backend using the Linux sysfs interface.

    Each operation opens, accesses and closes the corresponding file under the sysfs root, so no state
    is kept between calls.
    """

    DEFAULT_ROOT = "/sys/class/gpio"

    def __init__(self, root: str = DEFAULT_ROOT) -> None:
        self._root = root

    @classmethod
    def from_options(cls, options) -> "SysfsGpio":
        return cls(options.get('gpio.sysfs_root'))

    @property
    def root(self) -> str:
        return self._root

    def _pin_path(self, pin: int, attribute: str) -> str:
        return os.path.join(self._root, "gpio%d" % pin, attribute)

    def _write(self, path: str, text: str, pin: int) -> None:
        try:
            with open(path, 'w') as f:
                f.write(text)
        except OSError as err:
            # Exporting an exported pin, or the reverse, reports EBUSY.
            if err.errno == errno.EBUSY:
                LOG.debug("%s busy writing '%s'", path, text)
                return
            raise exceptions.GpioError("failed to write '%s' to %s: %s" % (text, path, err), pin=pin) from err

    def _read(self, path: str, pin: int) -> str:
        try:
            with open(path, 'r') as f:
                return f.read()
        except OSError as err:
            raise exceptions.GpioError("failed to read %s: %s" % (path, err), pin=pin) from err

    def export(self, pin: int) -> None:
        self._write(os.path.join(self._root, "export"), str(pin), pin)

    def unexport(self, pin: int) -> None:
        self._write(os.path.join(self._root, "unexport"), str(pin), pin)

    def set_direction(self, pin: int, direction: Direction) -> None:
        self._write(self._pin_path(pin, "direction"), direction.value, pin)

    def get_value(self, pin: int) -> bool:
        value = self._read(self._pin_path(pin, "value"), pin)
        return value[:1] != '0'

    def set_value(self, pin: int, value: bool) -> None:
        self._write(self._pin_path(pin, "value"), "1" if value else "0", pin)

GPIO_BACKENDS['sysfs'] = SysfsGpio
