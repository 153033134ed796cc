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

def _context_suffix(desc, parts):
    if parts:
        if desc:
            desc += " "
        desc += "(%s)" % ("; ".join(parts))
    return desc

class Error(RuntimeError):
    """! @brief Parent of all errors ccprog can raise"""
    pass

class InternalError(Error):
    """! @brief Internal consistency or logic error.

    This error indicates that something has happened that shouldn't be possible.
    """
    pass

class GpioError(Error):
    """! @brief A GPIO operation failed.

    The pin number, if known, can be passed to the constructor as the 'pin' keyword argument and
    is included in the string form of the exception. The XDATA address being accessed when the
    GPIO failed can be passed as 'address' or filled in later through the property setter.
    """
    def __init__(self, *args, **kwargs):
        super(GpioError, self).__init__(*args)
        self._pin = kwargs.get('pin', None)
        self._address = kwargs.get('address', None)

    @property
    def pin(self):
        return self._pin

    @property
    def address(self):
        return self._address

    @address.setter
    def address(self, addr):
        self._address = addr

    def __str__(self):
        desc = super(GpioError, self).__str__()
        parts = []
        if self._pin is not None:
            parts.append("gpio %d" % self._pin)
        if self._address is not None:
            parts.append("address 0x%04x" % self._address)
        return _context_suffix(desc, parts)

class TimeoutError(Error):
    """! @brief A bounded busy wait exhausted its retry budget.

    Keyword arguments of 'operation', 'address', 'index' and 'retries' are recorded and rendered
    when the exception is converted to a string. The address can also be filled in later through
    the property setter by a layer that knows it.
    """
    def __init__(self, *args, **kwargs):
        super(TimeoutError, self).__init__(*args)
        self._operation = kwargs.get('operation', None)
        self._address = kwargs.get('address', None)
        self._index = kwargs.get('index', None)
        self._retries = kwargs.get('retries', None)

    @property
    def operation(self):
        return self._operation

    @property
    def address(self):
        return self._address

    @address.setter
    def address(self, addr):
        self._address = addr

    @property
    def index(self):
        return self._index

    @property
    def retries(self):
        return self._retries

    def __str__(self):
        desc = super(TimeoutError, self).__str__()
        parts = []
        if self._operation is not None:
            parts.append(self._operation)
        if self._address is not None:
            parts.append("address 0x%04x" % self._address)
        if self._index is not None:
            parts.append("block %d" % self._index)
        if self._retries is not None:
            parts.append("%d retries" % self._retries)
        return _context_suffix(desc, parts)

class TargetError(Error):
    """! @brief An error that happens on the target"""
    pass

class TargetSupportError(TargetError):
    """! @brief The target reports a configuration that is not supported"""
    pass

class UnrecognizedChip(TargetError):
    """! @brief The chip ID read from the target is not a known chip.

    An ID of 0x00 or 0xFF means the clock and data lines are floating or driven by another device,
    rather than a genuine chip mismatch. The `is_bus_contention` property reports that case.
    """
    def __init__(self, *args, **kwargs):
        super(UnrecognizedChip, self).__init__(*args)
        self._chip_id = kwargs.get('chip_id', None)

    @property
    def chip_id(self):
        return self._chip_id

    @property
    def is_bus_contention(self):
        return self._chip_id in (0x00, 0xFF)

    def __str__(self):
        desc = super(UnrecognizedChip, self).__str__()
        parts = []
        if self._chip_id is not None:
            parts.append("chip id 0x%02x" % self._chip_id)
        if self.is_bus_contention:
            parts.append("lines are being driven by another device")
        return _context_suffix(desc, parts)

class ProtocolMismatch(TargetError):
    """! @brief A value written to the target was not echoed back as expected."""
    def __init__(self, *args, **kwargs):
        super(ProtocolMismatch, self).__init__(*args)
        self._expected = kwargs.get('expected', None)
        self._actual = kwargs.get('actual', None)

    @property
    def expected(self):
        return self._expected

    @property
    def actual(self):
        return self._actual

    def __str__(self):
        desc = super(ProtocolMismatch, self).__str__()
        parts = []
        if self._expected is not None:
            parts.append("expected 0x%02x" % self._expected)
        if self._actual is not None:
            parts.append("got 0x%02x" % self._actual)
        return _context_suffix(desc, parts)

class ImageTooLarge(Error):
    """! @brief The firmware image does not fit in the target's flash."""
    def __init__(self, *args, **kwargs):
        super(ImageTooLarge, self).__init__(*args)
        self._size = kwargs.get('size', None)
        self._capacity = kwargs.get('capacity', None)

    @property
    def size(self):
        return self._size

    @property
    def capacity(self):
        return self._capacity

    def __str__(self):
        desc = super(ImageTooLarge, self).__str__()
        parts = []
        if self._size is not None:
            parts.append("%d bytes" % self._size)
        if self._capacity is not None:
            parts.append("max %d bytes" % self._capacity)
        return _context_suffix(desc, parts)

class FlashFailure(TargetError):
    """! @brief Exception raised when flashing fails for some reason.

    Positional arguments passed to the constructor are passed through to the superclass'
    constructor, and thus operate like any other standard exception class. The flash address that
    failed can optionally be recorded in the exception, if passed to the constructor as the
    'address' keyword argument.
    """
    def __init__(self, *args, **kwargs):
        super(FlashFailure, self).__init__(*args)
        self._address = kwargs.get('address', None)

    @property
    def address(self):
        return self._address

    def __str__(self):
        desc = super(FlashFailure, self).__str__()
        if self._address is not None:
            return _context_suffix(desc, ["address 0x%05x" % self._address])
        return desc

class FlashEraseFailure(FlashFailure):
    """! @brief An attempt to erase flash failed. """
    pass

class FlashProgramFailure(FlashFailure):
    """! @brief An attempt to program flash failed. """
    pass

class CommandError(Error):
    """! @brief Raised when a command encounters an error."""
    pass
