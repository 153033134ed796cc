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
from ..target.chip import identify

LOG = logging.getLogger(__name__)

class InfoSubcommand(SubcommandBase):
    """! @brief `ccprog info` subcommand."""

    NAMES = ['info', 'id']
    HELP = "Identify the connected chip."
    DEFAULT_LOG_LEVEL = logging.WARNING

    @classmethod
    def get_args(cls) -> List[argparse.ArgumentParser]:
        """! @brief Add this subcommand to the subparsers object."""
        info_parser = argparse.ArgumentParser(description=cls.HELP, add_help=False)
        return [cls.CommonOptions.COMMON, cls.CommonOptions.CONNECT, info_parser]

    def invoke(self) -> int:
        """! @brief Handle 'info' subcommand."""
        with self._create_session() as session:
            info = identify(session.memory)

        pt = self._get_pretty_table(["Field", "Value"], header=False)
        pt.add_row(["Chip", info.name])
        pt.add_row(["Chip ID", "0x%02x" % info.chip_id])
        pt.add_row(["Revision", "0x%02x" % info.revision])
        pt.add_row(["Extended address", info.ext_address_str])
        pt.add_row(["USB", "yes" if info.has_usb else "no"])
        if info.flash_size is None:
            pt.add_row(["Flash size", "unknown (code %d)" % info.flash_size_code])
        else:
            pt.add_row(["Flash size", "%d KB" % (info.flash_size // 1024)])
        pt.add_row(["CHIPINFO1", "0x%02x" % info.chipinfo1])
        print(pt)
        return 0
