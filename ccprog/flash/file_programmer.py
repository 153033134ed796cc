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
from typing import (Callable, NamedTuple, Optional, Union)

from .eraser import ChipEraser
from .image import (FirmwareImage, ImageCursor, load_image)
from .programmer import (FlashProgrammer, ProgrammingPlan)
from .verifier import (FlashVerifier, VerifyResult)
from ..core import exceptions
from ..port import commands
from ..target.chip import (ChipInfo, identify)
from ..target.registers import (XReg, CLKCON_XOSC)
from ..utility.retry import RetryBudget

LOG = logging.getLogger(__name__)

class ProgramResult(NamedTuple):
    chip: ChipInfo
    plan: ProgrammingPlan
    max_speed: bool
    verify: Optional[VerifyResult]

class FileProgrammer(object):
    """! @brief Runs a complete programming cycle for one firmware image.

    The session must be open, so the target is already in debug mode. The steps are:

    1. Identify the chip, retrying a few times.
    2. Check that the image fits in the reported flash.
    3. Enable DMA in the debug configuration, re-entering debug mode if the target does not echo
        the configuration back.
    4. Switch the system clock to the crystal oscillator.
    5. Erase the chip.
    6. Program all blocks.
    7. Optionally read back and compare.

    Leaving debug mode is the session's job, so it happens on every exit path.
    """

    def __init__(self, session, progress: Optional[Callable[[int, int], None]] = None,
            verify: bool = False) -> None:
        """! @brief Constructor.

        @param self
        @param session An open session.
        @param progress Optional progress callable taking blocks done and block count.
        @param verify Whether to read flash back after programming.
        """
        self._session = session
        self._progress = progress
        self._verify = verify
        self._retries = session.options.get('timeout.retries')

    def program(self, image_or_path: Union[FirmwareImage, str], file_format: Optional[str] = None) -> ProgramResult:
        """! @brief Program a firmware image or file into flash.

        @exception ImageTooLarge The image does not fit in flash. Nothing has been erased.
        @exception FlashProgramFailure Verification found differences.
        """
        if isinstance(image_or_path, FirmwareImage):
            image = image_or_path
        else:
            image = load_image(image_or_path, file_format)

        chip = self.identify_with_retries()
        capacity = chip.flash_size
        if capacity is None:
            raise exceptions.TargetSupportError("unsupported flash size code %d" % chip.flash_size_code)
        if len(image) > capacity:
            raise exceptions.ImageTooLarge("firmware file too big", size=len(image), capacity=capacity)

        self.enable_dma()
        self.select_crystal_oscillator()

        memory = self._session.memory
        ChipEraser(self._session.protocol, self._retries,
                self._session.options.get('erase.poll_interval')).erase()

        plan = ProgrammingPlan(len(image))
        cursor = ImageCursor(image)
        LOG.info("Programming %d blocks", plan.block_count)
        max_speed = FlashProgrammer(memory, self._retries, self._progress).program(cursor, plan)
        if max_speed:
            LOG.info("Programmed at maximum speed")

        result = None
        if self._verify:
            result = FlashVerifier(memory).verify(cursor, plan.total_bytes)
            if result.compared != plan.total_bytes:
                raise exceptions.FlashProgramFailure("verification read back %d of %d bytes"
                        % (result.compared, plan.total_bytes), address=result.compared)
            if not result.ok:
                raise exceptions.FlashProgramFailure("verification failed with %d mismatches"
                        % len(result.mismatches), address=result.mismatches[0].address)
            LOG.info("Verification OK")

        return ProgramResult(chip, plan, max_speed, result)

    def identify_with_retries(self) -> ChipInfo:
        attempts = self._session.options.get('connect.retries')
        for attempt in range(1, attempts + 1):
            try:
                return identify(self._session.memory)
            except (exceptions.UnrecognizedChip, exceptions.TimeoutError) as err:
                LOG.warning("failed to identify chip (attempt %d of %d): %s", attempt, attempts, err)
                if attempt == attempts:
                    raise
        raise exceptions.InternalError("no identification attempts")

    def enable_dma(self) -> None:
        """! @brief Write the debug configuration that enables DMA.

        @exception ProtocolMismatch The target never echoed the configuration.
        """
        config = self._session.options.get('debug.config')
        attempts = self._session.options.get('connect.retries')
        result = None
        for attempt in range(1, attempts + 1):
            result = self._session.protocol.execute(commands.WRITE_CONFIG, [config])[0]
            if result == config:
                return
            LOG.warning("write config failed (attempt %d of %d)", attempt, attempts)
            self._session.debug.enter()
        raise exceptions.ProtocolMismatch("failed to enable DMA", expected=config, actual=result)

    def select_crystal_oscillator(self) -> None:
        memory = self._session.memory
        memory.write_byte(XReg.CLKCONCMD, CLKCON_XOSC)
        with RetryBudget(self._retries) as budget:
            while budget.check():
                if memory.read_byte(XReg.CLKCONSTA) == CLKCON_XOSC:
                    break
            else:
                raise exceptions.TimeoutError("timeout waiting for CLKCONSTA", operation="clock switch",
                        address=XReg.CLKCONSTA, retries=budget.retries)
