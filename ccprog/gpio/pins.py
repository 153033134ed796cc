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

from enum import Enum
from typing import (Dict, NamedTuple, Type)

class Direction(Enum):
    """@brief GPIO line direction."""
    IN = "in"
    OUT = "out"
    ## Output, initially driven high.
    HIGH = "high"

class PinSet(NamedTuple):
    """@brief GPIO numbers of the three debug lines."""
    reset: int
    clock: int
    data: int

class GpioPins:
    """@brief Abstract GPIO capability.

    Subclasses drive real or simulated GPIO lines. Every method may fail, in which case it must raise
    @ref ccprog.core.exceptions.GpioError "GpioError" with the pin number set.

    Use an instance as follows:

    1. Call export() for each pin, then set_direction().
    2. Drive and sample with set_value() and get_value().
    3. Return each pin to an input and call unexport().
    """

    @classmethod
    def from_options(cls, options) -> "GpioPins":
        """@brief Create an instance configured from session options."""
        return cls()

    def export(self, pin: int) -> None:
        """@brief Make a pin available for use."""
        raise NotImplementedError()

    def unexport(self, pin: int) -> None:
        """@brief Release a pin."""
        raise NotImplementedError()

    def set_direction(self, pin: int, direction: Direction) -> None:
        raise NotImplementedError()

    def get_value(self, pin: int) -> bool:
        raise NotImplementedError()

    def set_value(self, pin: int, value: bool) -> None:
        raise NotImplementedError()

## @brief Map of GPIO backend names to classes, filled in by the backend modules.
GPIO_BACKENDS: Dict[str, Type[GpioPins]] = {}
