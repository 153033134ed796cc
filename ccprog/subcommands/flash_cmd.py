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

import argparse
from typing import List
import logging

from .base import SubcommandBase
from ..flash.file_programmer import FileProgrammer
from ..utility.progress import print_progress

LOG = logging.getLogger(__name__)

class FlashSubcommand(SubcommandBase):
    """! @brief `ccprog flash` subcommand."""

    NAMES = ['flash', 'load']
    HELP = "Erase the chip and program a firmware image."
    EPILOG = ("The image is a raw binary or an Intel HEX file. Binaries are written starting at flash "
            "address 0. The whole chip is erased first, including the parts the image does not cover.")

    @classmethod
    def get_args(cls) -> List[argparse.ArgumentParser]:
        """! @brief Add this subcommand to the subparsers object."""
        flash_parser = argparse.ArgumentParser(description=cls.HELP, add_help=False)

        flash_options = flash_parser.add_argument_group("flash options")
        flash_options.add_argument("-r", "--verify", action="store_true",
            help="Read flash back after programming and compare it with the image.")
        flash_options.add_argument("-P", "--progress", action="store_true",
            help="Show a progress bar.")
        flash_options.add_argument("--format", choices=("bin", "hex"),
            help="File format. Default is to use the file's extension.")
        flash_options.add_argument("file", metavar="<file-path>",
            help="Firmware image to program.")

        return [cls.CommonOptions.COMMON, cls.CommonOptions.CONNECT, flash_parser]

    def invoke(self) -> int:
        """! @brief Handle 'flash' subcommand."""
        self._increase_logging(["ccprog.flash.file_programmer", "ccprog.flash"])

        progress = print_progress() if self._args.progress else None
        with self._create_session() as session:
            programmer = FileProgrammer(session, progress=progress, verify=self._args.verify)
            result = programmer.program(self._args.file, file_format=self._args.format)

        LOG.info("Wrote %d bytes in %d blocks to %s", result.plan.total_bytes, result.plan.block_count,
                result.chip.name)
        return 0
