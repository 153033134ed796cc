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
from typing import Optional

from intelhex import IntelHex

LOG = logging.getLogger(__name__)

## Value of erased flash, used to pad partial blocks.
ERASED_BYTE = 0xFF

class FirmwareImage(object):
    """! @brief Immutable firmware contents, starting at flash address 0."""

    def __init__(self, data: bytes, name: Optional[str] = None) -> None:
        self._data = bytes(data)
        self._name = name

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def name(self) -> Optional[str]:
        return self._name

    def __len__(self) -> int:
        return len(self._data)

    def padded(self, length: int) -> bytes:
        """! @brief Return the contents padded with erased bytes up to _length_."""
        if length <= len(self._data):
            return self._data[:length]
        return self._data + bytes([ERASED_BYTE]) * (length - len(self._data))

    def __repr__(self) -> str:
        return "<%s@%x %s %d bytes>" % (self.__class__.__name__, id(self), self._name, len(self._data))

class ImageCursor(object):
    """! @brief Read position into a firmware image.

    Programming consumes the image sequentially through the cursor. Verification rewinds it to zero
    and consumes it again. Reads past the end of the image return erased bytes.
    """

    def __init__(self, image: FirmwareImage) -> None:
        self._image = image
        self._position = 0

    @property
    def image(self) -> FirmwareImage:
        return self._image

    @property
    def position(self) -> int:
        return self._position

    def rewind(self) -> None:
        self._position = 0

    def next_byte(self) -> int:
        data = self._image.data
        value = data[self._position] if self._position < len(data) else ERASED_BYTE
        self._position += 1
        return value

    def take(self, count: int) -> bytes:
        chunk = self._image.padded(self._position + count)[self._position:]
        self._position += count
        return chunk

def _load_bin(path: str) -> bytes:
    with open(path, 'rb') as f:
        return f.read()

def _load_hex(path: str) -> bytes:
    ih = IntelHex(path)
    if ih.minaddr() is None:
        return b""
    ih.padding = ERASED_BYTE
    # The image always starts at flash address 0.
    return ih.tobinstr(start=0, end=ih.maxaddr())

_FORMAT_HANDLERS = {
    'bin': _load_bin,
    'hex': _load_hex,
    'ihex': _load_hex,
    }

def load_image(path: str, file_format: Optional[str] = None) -> FirmwareImage:
    """! @brief Read a firmware file entirely into memory.

    @param path Path to the firmware file.
    @param file_format Optional format name, one of "bin" or "hex". If not provided, the file's
        extension is used, and a file without an extension is read as a raw binary.
    @exception FileNotFoundError The path does not reference a file.
    @exception ValueError Unknown file format.
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(errno.ENOENT, "No such file: '{}'".format(path))

    if not file_format:
        file_format = os.path.splitext(path)[1][1:].lower() or 'bin'

    try:
        handler = _FORMAT_HANDLERS[file_format]
    except KeyError:
        raise ValueError("unknown file format '%s'" % file_format)

    data = handler(path)
    LOG.info("Using firmware file: %s (%d bytes)", path, len(data))
    return FirmwareImage(data, name=os.path.basename(path))
