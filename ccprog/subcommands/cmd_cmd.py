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
from ..core import exceptions
from ..port.commands import (get_command, BURST_WRITE)
from ..utility.cmdline import convert_byte_list

LOG = logging.getLogger(__name__)

class CmdSubcommand(SubcommandBase):
    """! @brief `ccprog cmd` subcommand."""

    NAMES = ['cmd']
    HELP = "Send a single debug command and print the response."
    EPILOG = ("Command names may be abbreviated; the first command in table order that starts with the "
            "given name is used. Run 'ccprog list' to see the table. Parameter bytes are decimal, or hex "
            "with a 0x prefix. Example: ccprog cmd debug_inst 0x00 (executes a NOP)")
    DEFAULT_LOG_LEVEL = logging.WARNING

    @classmethod
    def get_args(cls) -> List[argparse.ArgumentParser]:
        """! @brief Add this subcommand to the subparsers object."""
        cmd_parser = argparse.ArgumentParser(description=cls.HELP, add_help=False)

        cmd_options = cmd_parser.add_argument_group("command")
        cmd_options.add_argument("name", metavar="<command>",
            help="Name of the debug command.")
        cmd_options.add_argument("params", metavar="<byte>", nargs='*',
            help="Parameter bytes.")

        return [cls.CommonOptions.COMMON, cls.CommonOptions.CONNECT, cmd_parser]

    def invoke(self) -> int:
        """! @brief Handle 'cmd' subcommand."""
        spec = get_command(self._args.name)
        if spec is BURST_WRITE:
            raise exceptions.CommandError("burst_write cannot be sent as a single command")
        params = convert_byte_list(self._args.params)

        with self._create_session() as session:
            response = session.protocol.execute(spec, params)

        print("%s: %s" % (spec.name, " ".join("%02x" % b for b in response)))
        return 0
