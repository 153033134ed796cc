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
from ..port.commands import COMMANDS

LOG = logging.getLogger(__name__)

class ListSubcommand(SubcommandBase):
    """! @brief `ccprog list` subcommand."""

    NAMES = ['list']
    HELP = "List the debug commands."
    DEFAULT_LOG_LEVEL = logging.WARNING

    @classmethod
    def get_args(cls) -> List[argparse.ArgumentParser]:
        """! @brief Add this subcommand to the subparsers object."""
        list_parser = argparse.ArgumentParser(description=cls.HELP, add_help=False)
        return [cls.CommonOptions.LOGGING, list_parser]

    def invoke(self) -> int:
        """! @brief Handle 'list' subcommand."""
        pt = self._get_pretty_table(["Name", "Opcode", "In", "Out"])
        for cmd in COMMANDS:
            pt.add_row([
                cmd.name,
                "0x%02x" % cmd.opcode,
                "n" if cmd.is_variable else cmd.in_bytes,
                cmd.out_bytes,
                ])
        print(pt)
        return 0
