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

from enum import IntEnum
from typing import Optional

class XReg(IntEnum):
    """@brief CC2530 registers as seen in the XDATA address space.

    Only registers with 16-bit XDATA addresses can be reached through injected MOVX instructions.
    """
    ## First of the 8 IEEE extended address bytes, least significant byte first.
    EXT_ADDR_BASE = 0x616A
    DBGDATA = 0x6260
    FCTL = 0x6270
    FADDRL = 0x6271
    FADDRH = 0x6272
    FWDATA = 0x6273
    CHIPINFO0 = 0x6276
    CHIPINFO1 = 0x6277
    CLKCONSTA = 0x709E
    CLKCONCMD = 0x70C6
    MEMCTR = 0x70C7
    DMA1CFGL = 0x70D2
    DMA1CFGH = 0x70D3
    DMAARM = 0x70D6

## FCTL: flash controller busy.
FCTL_BUSY = 0x80
## FCTL: start a write through FWDATA.
FCTL_WRITE = 0x06

## CLKCONCMD/CLKCONSTA value selecting the 32 MHz crystal at full speed.
CLKCON_XOSC = 0x80

## CHIPINFO0 fields.
CHIPINFO0_USB = 0x08
CHIPINFO0_FLASHSIZE_MASK = 0x70
CHIPINFO0_FLASHSIZE_SHIFT = 4

## Start of the XDATA window onto the flash bank selected by MEMCTR.
XBANK_BASE = 0x8000
XBANK_SIZE = 32 * 1024
XBANK_COUNT = 8

def register_name(address: int) -> Optional[str]:
    """@brief Return the register name for an XDATA address, or None."""
    try:
        return XReg(address).name
    except ValueError:
        return None

def describe_address(address: int) -> str:
    """@brief Format an XDATA address for diagnostics, with the register name if there is one."""
    name = register_name(address)
    if name is None:
        return "0x%04x" % address
    return "%s (0x%04x)" % (name, address)
