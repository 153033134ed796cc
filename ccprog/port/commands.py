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

from typing import (NamedTuple, Optional, Tuple)

from ..core import exceptions

CMD_ERASE = 0x10
CMD_WR_CFG = 0x18
CMD_RD_CFG = 0x20
CMD_GET_PC = 0x28
CMD_RD_ST = 0x30
CMD_SET_BRK = 0x38
CMD_HALT = 0x40
CMD_RESUME = 0x48
CMD_DBG_INST = 0x50
CMD_STEP_INST = 0x58
CMD_GET_BM = 0x60
CMD_GET_CHIP = 0x68
CMD_BURST_WR = 0x80

## Marks a command whose parameter count is chosen by the caller.
VARIABLE = None

class CommandSpec(NamedTuple):
    """@brief Description of one debug port command."""
    name: str
    opcode: int
    ## Number of parameter bytes, or VARIABLE.
    in_bytes: Optional[int]
    ## Number of response bytes.
    out_bytes: int

    @property
    def is_variable(self) -> bool:
        return self.in_bytes is VARIABLE

## @brief The command table, in lookup order.
COMMANDS: Tuple[CommandSpec, ...] = (
    CommandSpec("erase",          CMD_ERASE,     0,        1),
    CommandSpec("write_config",   CMD_WR_CFG,    1,        1),
    CommandSpec("read_config",    CMD_RD_CFG,    0,        1),
    CommandSpec("get_pc",         CMD_GET_PC,    0,        2),
    CommandSpec("read_status",    CMD_RD_ST,     0,        1),
    CommandSpec("set_break",      CMD_SET_BRK,   3,        1),
    CommandSpec("halt",           CMD_HALT,      0,        1),
    CommandSpec("resume",         CMD_RESUME,    0,        1),
    CommandSpec("debug_inst",     CMD_DBG_INST,  VARIABLE, 1),
    CommandSpec("step_inst",      CMD_STEP_INST, 0,        1),
    CommandSpec("get_bm",         CMD_GET_BM,    0,        1),
    CommandSpec("get_chip_id",    CMD_GET_CHIP,  0,        2),
    CommandSpec("burst_write",    CMD_BURST_WR,  VARIABLE, 1),
    )

ERASE, WRITE_CONFIG, READ_CONFIG, GET_PC, READ_STATUS, SET_BREAK, HALT, RESUME, \
    DEBUG_INST, STEP_INST, GET_BM, GET_CHIP_ID, BURST_WRITE = COMMANDS

def find_command(name: str) -> Optional[CommandSpec]:
    """@brief Look up a command by name.

    The comparison covers only the length of _name_, so any prefix of a command name matches, and
    the first matching entry in table order wins. "read" finds "read_config", not "read_status".
    """
    if not name:
        return None
    for cmd in COMMANDS:
        if cmd.name[:len(name)] == name:
            return cmd
    return None

def get_command(name: str) -> CommandSpec:
    """@brief Look up a command by name, raising CommandError if there is no match."""
    cmd = find_command(name)
    if cmd is None:
        raise exceptions.CommandError("unknown command: %s" % name)
    return cmd
